"""默认安装器

宿主的标准安装方式: 将包的 dist 目录完整复制到 <vendor_dir>/<vendor>/<name>，
得到实体副本。没有本地源的包全部走这里。
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from symlinker.core.exceptions import PackageSourceError
from symlinker.core.models import MODE_DEFAULT, HostPackage, OperationReport

logger = logging.getLogger(__name__)


class DefaultInstaller:
    """复制式安装器 - 生成实体副本"""

    def __init__(self, vendor_dir: str | Path, package_type: str = "library") -> None:
        self.vendor_dir = Path(vendor_dir)
        self.package_type = package_type

    def supports(self, package_type: str) -> bool:
        return package_type == self.package_type

    def get_install_path(self, package: HostPackage) -> Path:
        return self.vendor_dir / package.pretty_name

    def is_installed(self, package: HostPackage) -> bool:
        return os.path.lexists(self.get_install_path(package))

    def install_code(self, package: HostPackage) -> OperationReport:
        src = Path(package.dist_path) if package.dist_path else None
        if src is None or not src.is_dir():
            raise PackageSourceError(
                f"包 '{package.pretty_name}' 的 dist 目录不存在: {package.dist_path or '(未定义)'}"
            )

        dest = self.get_install_path(package)
        self._remove_path(dest)
        dest.parent.mkdir(parents=True, exist_ok=True)
        logger.info("  - 安装 %s (%s)", package.pretty_name, package.version)
        shutil.copytree(src, dest, symlinks=True)
        return OperationReport(
            package=package.pretty_name,
            operation="install",
            mode=MODE_DEFAULT,
            install_path=str(dest),
        )

    def update_code(self, initial: HostPackage, target: HostPackage) -> OperationReport:
        logger.info(
            "  - 更新 %s (%s => %s)",
            target.pretty_name, initial.version, target.version,
        )
        self._remove_path(self.get_install_path(initial))
        report = self.install_code(target)
        report.operation = "update"
        return report

    def remove_code(self, package: HostPackage) -> OperationReport:
        dest = self.get_install_path(package)
        logger.info("  - 删除 %s", package.pretty_name)
        self._remove_path(dest)
        return OperationReport(
            package=package.pretty_name,
            operation="remove",
            mode=MODE_DEFAULT,
            install_path=str(dest),
        )

    @staticmethod
    def _remove_path(path: Path) -> None:
        # 软链接只删条目，不进入目标目录
        if path.is_symlink():
            path.unlink()
        elif path.exists():
            shutil.rmtree(path)
