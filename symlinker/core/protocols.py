"""安装器协议

DefaultInstaller 与 LocalAwareInstaller 都满足此协议；
LocalAwareInstaller 持有前者并显式委托，不通过继承复用。

使用 typing.Protocol 而非 ABC，实现类无需修改继承关系即可满足协议。
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from symlinker.core.models import HostPackage, OperationReport


class PackageInstaller(Protocol):
    """包安装器协议"""

    def supports(self, package_type: str) -> bool:
        ...

    def get_install_path(self, package: HostPackage) -> Path:
        ...

    def install_code(self, package: HostPackage) -> OperationReport:
        ...

    def update_code(self, initial: HostPackage, target: HostPackage) -> OperationReport:
        ...

    def remove_code(self, package: HostPackage) -> OperationReport:
        ...
