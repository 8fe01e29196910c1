"""本地感知安装器

对每个生命周期操作先判断是否介入，不介入时完全委托给默认安装器:

  install: 找到合法本地源 -> 创建软链接；否则委托
  update:  初始安装路径是受管软链接 -> 路径变化则重命名链接，
           路径不变则不做任何操作，两种情况都不调用默认安装器；否则委托
  remove:  安装路径是受管软链接 -> 只删除链接；否则委托

每次调用都从磁盘现状重新判断，不依赖任何持久化记录。

用法:
    delegates = manager.snapshot()
    installer = LocalAwareInstaller(local_config, delegates)
    manager.add_installer(installer)
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from symlinker.core.local.models import (
    LinkState,
    PackageIdentity,
    ResolutionResult,
    absolute_install_path,
)
from symlinker.core.local.resolver import PathResolver
from symlinker.core.local.settings import LocalSourceConfig
from symlinker.core.local.symlink import SymlinkManager
from symlinker.core.manager import InstallerRegistry
from symlinker.core.models import MODE_SYMLINK, HostPackage, OperationReport
from symlinker.core.protocols import PackageInstaller

logger = logging.getLogger(__name__)


class LocalAwareInstaller:
    """本地优先安装器 - 有本地源时安装为软链接，否则委托默认安装器"""

    def __init__(
        self,
        config: LocalSourceConfig,
        delegates: InstallerRegistry,
        *,
        resolver: PathResolver | None = None,
        symlinks: SymlinkManager | None = None,
    ) -> None:
        self.config = config
        self._delegates = delegates
        self._resolver = resolver or PathResolver(config)
        self._symlinks = symlinks or SymlinkManager()

    def supports(self, package_type: str) -> bool:
        return self._delegates.supports(package_type)

    def get_install_path(self, package: HostPackage) -> Path:
        return absolute_install_path(self._delegate(package).get_install_path(package))

    def identity(self, package: HostPackage) -> PackageIdentity:
        return PackageIdentity.from_package(package, self.get_install_path(package))

    def resolve(self, package: HostPackage) -> ResolutionResult:
        return self._resolver.resolve(self.identity(package))

    def is_local_symlink(self, package: HostPackage) -> bool:
        return self._symlinks.is_managed_symlink(self.get_install_path(package), self.config)

    def link_state(self, package: HostPackage) -> LinkState:
        return self._symlinks.link_state(self.get_install_path(package), self.config)

    # ------------------------------------------------------------------
    # 生命周期
    # ------------------------------------------------------------------

    def install_code(self, package: HostPackage) -> OperationReport:
        """安装包

        异常:
            SymlinkFailure: 创建软链接失败，中止该包的安装
        """
        identity = self.identity(package)
        result = self._resolver.resolve(identity)
        if result.path is None:
            return self._delegate(package).install_code(package)

        if self._already_linked(identity.install_path, result.path):
            logger.info("  - %s 已是 %s 的软链接，跳过", package.name, result.path)
            return OperationReport(
                package=package.pretty_name,
                operation="install",
                mode=MODE_SYMLINK,
                install_path=str(identity.install_path),
                source=result.path,
                changed=False,
            )

        logger.info(
            "  - 安装 %s（作为 %s 的软链接）", package.name, result.path,
        )
        self._symlinks.link(identity.install_path, result.path)
        return OperationReport(
            package=package.pretty_name,
            operation="install",
            mode=MODE_SYMLINK,
            install_path=str(identity.install_path),
            source=result.path,
        )

    def update_code(self, initial: HostPackage, target: HostPackage) -> OperationReport:
        if not self.is_local_symlink(initial):
            return self._delegate(initial).update_code(initial, target)

        old_path = self.get_install_path(initial)
        new_path = self.get_install_path(target)
        changed = old_path != new_path
        if changed:
            logger.info("  - 移动软链接 %s: %s -> %s", target.name, old_path, new_path)
            self._symlinks.relink(old_path, new_path)
        else:
            logger.debug("软链接安装路径未变化: %s", old_path)
        return OperationReport(
            package=target.pretty_name,
            operation="update",
            mode=MODE_SYMLINK,
            install_path=str(new_path),
            changed=changed,
        )

    def remove_code(self, package: HostPackage) -> OperationReport:
        if not self.is_local_symlink(package):
            return self._delegate(package).remove_code(package)

        install_path = self.get_install_path(package)
        logger.info("  - 删除软链接 %s: %s", package.name, install_path)
        self._symlinks.unlink(install_path)
        return OperationReport(
            package=package.pretty_name,
            operation="remove",
            mode=MODE_SYMLINK,
            install_path=str(install_path),
        )

    def _delegate(self, package: HostPackage) -> PackageInstaller:
        return self._delegates.get_installer(package.package_type)

    def _already_linked(self, install_path: Path, source: str) -> bool:
        if not self._symlinks.is_managed_symlink(install_path, self.config):
            return False
        return os.path.realpath(install_path) == os.path.realpath(source)
