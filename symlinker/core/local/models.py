"""本地源数据模型

数据类:
- PackageIdentity: 包标识 + 绝对安装路径
- ResolutionResult: 本地源解析结果
- LinkState: 安装路径的磁盘状态
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from symlinker.core.models import HostPackage


def absolute_install_path(path: str | Path) -> Path:
    """宿主返回相对路径时，以当前工作目录补全为绝对路径"""
    p = Path(path)
    if p.is_absolute():
        return p
    return Path(os.path.realpath(".")) / str(path).rstrip("/")


@dataclass(frozen=True)
class PackageIdentity:
    """单个包在一次生命周期调用中的标识"""

    vendor: str
    name: str
    pretty_name: str      # vendor/name
    install_path: Path

    @classmethod
    def from_package(cls, package: HostPackage, install_path: str | Path) -> PackageIdentity:
        return cls(
            vendor=package.vendor,
            name=package.short_name,
            pretty_name=package.pretty_name,
            install_path=absolute_install_path(install_path),
        )


@dataclass(frozen=True)
class ResolutionResult:
    """本地源解析结果，path 为 None 表示完全交给默认安装器"""

    path: str | None = None
    origin: str = ""      # "explicit" / "directory"

    @property
    def found(self) -> bool:
        return self.path is not None

    @classmethod
    def none(cls) -> ResolutionResult:
        return cls()

    @classmethod
    def explicit(cls, path: str) -> ResolutionResult:
        return cls(path=path, origin="explicit")

    @classmethod
    def directory(cls, path: str) -> ResolutionResult:
        return cls(path=path, origin="directory")


class LinkState(str, Enum):
    """安装路径的磁盘状态

    同一安装路径只会处于 MATERIALIZED / MANAGED_SYMLINK 之一；
    ABSENT 与 FOREIGN_SYMLINK 仅用于状态展示。
    """

    ABSENT = "absent"
    MATERIALIZED = "copy"
    MANAGED_SYMLINK = "symlink"
    FOREIGN_SYMLINK = "foreign-symlink"
