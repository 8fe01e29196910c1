"""核心数据模型

- HostPackage: 宿主提供的包描述（名称、版本、类型、dist 路径）
- OperationReport: 一次 install / update / remove 的结果
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from symlinker.core.exceptions import ConfigError

MODE_SYMLINK = "symlink"
MODE_DEFAULT = "default"

_OPERATION_LABELS = {"install": "安装", "update": "更新", "remove": "删除"}


@dataclass(frozen=True)
class HostPackage:
    """宿主包描述，pretty_name 保留原始大小写"""

    pretty_name: str
    version: str = "dev-main"
    package_type: str = "library"
    dist_path: str = ""   # 默认安装器复制来源

    @property
    def name(self) -> str:
        return self.pretty_name.lower()

    @property
    def vendor(self) -> str:
        return self.name.split("/", 1)[0]

    @property
    def short_name(self) -> str:
        parts = self.pretty_name.split("/", 1)
        return parts[1] if len(parts) == 2 else ""

    def replace(self, **changes: Any) -> HostPackage:
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_lock_entry(cls, entry: dict[str, Any], base_dir: Path) -> HostPackage:
        """由锁文件 packages[] 中的一项构建，相对 dist 路径以项目根目录为基准"""
        if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
            raise ConfigError(f"锁文件条目缺少 name: {entry!r}")
        dist = entry.get("dist") or {}
        dist_path = dist.get("url", "") if isinstance(dist, dict) else ""
        if dist_path and not Path(dist_path).is_absolute():
            dist_path = str(base_dir / dist_path)
        return cls(
            pretty_name=entry["name"],
            version=str(entry.get("version", "dev-main")),
            package_type=entry.get("type", "library"),
            dist_path=dist_path,
        )


@dataclass
class OperationReport:
    """单个包生命周期操作的结果"""

    package: str
    operation: str        # install / update / remove
    mode: str             # symlink / default
    install_path: str = ""
    source: str = ""      # 软链接指向的本地源
    changed: bool = True  # False 表示无需任何文件系统操作

    @property
    def message(self) -> str:
        if self.mode != MODE_SYMLINK:
            label = _OPERATION_LABELS.get(self.operation, self.operation)
            return f"{label} {self.package}: {self.install_path}"
        if self.operation == "install":
            if not self.changed:
                return f"{self.package}: 已是 {self.source} 的软链接，无需变更"
            return f"{self.package}: 已安装为 {self.source} 的软链接"
        if self.operation == "update":
            if not self.changed:
                return f"{self.package}: 软链接无需变更"
            return f"{self.package}: 软链接已移动到 {self.install_path}"
        return f"{self.package}: 已删除软链接 {self.install_path}"
