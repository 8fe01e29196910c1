"""本地源路径解析

按固定顺序查找，先命中者胜出:
  1. vendor 白名单非空且不包含该包的 vendor -> 无本地源
  2. local-packages 显式声明 -> 直接返回（构建配置时已校验）
  3. 按顺序扫描 local-dirs，候选路径为 <dir>/<vendor>/<name>
  4. 均未命中 -> 无本地源
"""

from __future__ import annotations

import logging

from symlinker.core.local.models import PackageIdentity, ResolutionResult
from symlinker.core.local.settings import LocalSourceConfig
from symlinker.core.local.validator import PackageValidator

logger = logging.getLogger(__name__)


class PathResolver:
    """本地源解析器 - 只做查找，不修改文件系统"""

    def __init__(
        self,
        config: LocalSourceConfig,
        validator: PackageValidator | None = None,
    ) -> None:
        self.config = config
        self.validator = validator or config.validator

    def resolve(self, package: PackageIdentity) -> ResolutionResult:
        allowed = self.config.vendor_allow_list
        if allowed and package.vendor not in allowed:
            logger.debug("vendor 不在白名单中，跳过本地解析: %s", package.pretty_name)
            return ResolutionResult.none()

        explicit = self.config.explicit_package_paths.get(package.pretty_name)
        if explicit is not None:
            logger.debug("显式声明命中: %s -> %s", package.pretty_name, explicit)
            return ResolutionResult.explicit(explicit)

        for candidate in self.candidates(package):
            if self.validator.is_valid_package(candidate):
                logger.debug("本地目录命中: %s -> %s", package.pretty_name, candidate)
                return ResolutionResult.directory(candidate)

        return ResolutionResult.none()

    def candidates(self, package: PackageIdentity) -> list[str]:
        """按 local-dirs 顺序列出候选路径"""
        return [
            f"{directory}/{package.pretty_name}"
            for directory in self.config.search_directories
        ]
