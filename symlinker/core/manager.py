"""安装管理器

InstallationManager 维护安装器列表（后注册者优先），按包类型分派
install / update / remove。

InstallerRegistry 是某一时刻安装器列表的只读快照。插件激活时取快照注入
LocalAwareInstaller 作为委托查找表，避免复制整个管理器，也避免新安装器
查到自己。
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from symlinker.core.exceptions import InstallerNotFoundError, SymlinkerError
from symlinker.core.models import HostPackage, OperationReport
from symlinker.core.protocols import PackageInstaller

logger = logging.getLogger(__name__)


class InstallerRegistry:
    """只读安装器查找表，靠前者优先"""

    def __init__(self, installers: Iterable[PackageInstaller] = ()) -> None:
        self._installers: tuple[PackageInstaller, ...] = tuple(installers)

    def __iter__(self) -> Iterator[PackageInstaller]:
        return iter(self._installers)

    def __len__(self) -> int:
        return len(self._installers)

    def supports(self, package_type: str) -> bool:
        return any(i.supports(package_type) for i in self._installers)

    def get_installer(self, package_type: str) -> PackageInstaller:
        for installer in self._installers:
            if installer.supports(package_type):
                return installer
        raise InstallerNotFoundError(f"未找到支持包类型 '{package_type}' 的安装器")


class InstallationManager:
    """按包类型分派生命周期操作"""

    def __init__(self) -> None:
        self._installers: list[PackageInstaller] = []

    def add_installer(self, installer: PackageInstaller) -> None:
        self._installers.insert(0, installer)

    def snapshot(self) -> InstallerRegistry:
        return InstallerRegistry(self._installers)

    def get_installer(self, package_type: str) -> PackageInstaller:
        return self.snapshot().get_installer(package_type)

    def get_install_path(self, package: HostPackage) -> Path:
        return self.get_installer(package.package_type).get_install_path(package)

    def install(self, package: HostPackage) -> OperationReport:
        return self.get_installer(package.package_type).install_code(package)

    def update(self, initial: HostPackage, target: HostPackage) -> OperationReport:
        """更新包；类型变化时先用旧安装器删除，再用新安装器安装"""
        installer = self.get_installer(initial.package_type)
        if initial.package_type == target.package_type:
            return installer.update_code(initial, target)

        installer.remove_code(initial)
        report = self.get_installer(target.package_type).install_code(target)
        report.operation = "update"
        return report

    def remove(self, package: HostPackage) -> OperationReport:
        return self.get_installer(package.package_type).remove_code(package)

    def install_all(
        self, packages: Iterable[HostPackage],
    ) -> dict[str, OperationReport | str]:
        """逐个安装，单个包失败不影响其他包，返回 {name: report|error_msg}"""
        results: dict[str, OperationReport | str] = {}
        failed: dict[str, str] = {}
        for package in packages:
            try:
                results[package.pretty_name] = self.install(package)
            except (SymlinkerError, OSError) as exc:
                logger.exception("安装失败: %s", package.pretty_name)
                failed[package.pretty_name] = str(exc)
                results[package.pretty_name] = f"[FAILED] {exc}"
        if failed:
            logger.warning(
                "安装汇总: %d 成功, %d 失败 (%s)",
                len(results) - len(failed),
                len(failed),
                ", ".join(failed),
            )
        return results
