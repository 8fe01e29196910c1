"""软链接生命周期管理

职责:
- 创建软链接（相对路径目标，按需创建 vendor 子目录）
- 安装路径变化时重命名链接本身
- 删除链接（从不删除链接指向的真实目录）
- 识别由本工具创建的链接

没有独立的元数据存储: 链接本身及其指向就是全部状态。
识别依赖对解析后路径做字符串前缀匹配，属于启发式判断，
恰好指向配置目录下的外部链接也会被认作受管链接。
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from symlinker.core.exceptions import SymlinkFailure
from symlinker.core.local.models import LinkState
from symlinker.core.local.settings import LocalSourceConfig

logger = logging.getLogger(__name__)


def shortest_path(install_path: str | Path, target_path: str | Path) -> str:
    """计算从安装路径所在目录到目标的最短路径

    两者除根目录外没有公共前缀时返回目标的绝对路径。
    """
    base = os.path.dirname(os.path.abspath(install_path))
    target = os.path.abspath(target_path)
    try:
        common = os.path.commonpath([base, target])
    except ValueError:
        # 不同盘符
        return target
    if common in ("", os.sep):
        return target
    return os.path.relpath(target, base)


class SymlinkManager:
    """安装路径上软链接的创建、重命名、删除与识别"""

    def link(self, install_path: str | Path, target_path: str | Path) -> None:
        """在 install_path 创建指向 target_path 的相对软链接

        异常:
            SymlinkFailure: 路径已被占用、无权限或文件系统不支持软链接
        """
        install = Path(install_path)
        target = shortest_path(install, target_path)
        try:
            with self._scoped_parent(install):
                os.symlink(target, install, target_is_directory=True)
        except OSError as exc:
            raise SymlinkFailure(
                f"软链接创建失败: {target_path} -> {install} ({exc})"
            ) from exc
        logger.debug("已创建软链接: %s -> %s", install, target)

    def relink(self, old_install_path: str | Path, new_install_path: str | Path) -> None:
        """安装路径变化时重命名链接本身，路径相同则不做任何操作"""
        old, new = Path(old_install_path), Path(new_install_path)
        if old == new:
            return
        if os.path.lexists(new):
            raise SymlinkFailure(f"目标安装路径已被占用: {new}")
        try:
            with self._scoped_parent(new):
                os.rename(old, new)
        except OSError as exc:
            raise SymlinkFailure(f"软链接重命名失败: {old} -> {new} ({exc})") from exc
        logger.debug("已重命名软链接: %s -> %s", old, new)
        if not os.path.exists(new):
            # 相对目标随链接一起移动，深度变化后不再指向原目录
            logger.warning(
                "软链接重命名后目标无法解析（目录深度 %d -> %d）: %s -> %s",
                len(old.parents), len(new.parents), new, os.readlink(new),
            )

    def unlink(self, install_path: str | Path) -> None:
        """只删除链接条目本身"""
        path = Path(install_path)
        if not path.is_symlink():
            raise SymlinkFailure(f"不是软链接，拒绝删除: {path}")
        try:
            path.unlink()
        except OSError as exc:
            raise SymlinkFailure(f"软链接删除失败: {path} ({exc})") from exc
        logger.debug("已删除软链接: %s", path)

    def is_managed_symlink(self, install_path: str | Path, config: LocalSourceConfig) -> bool:
        """判断 install_path 是否为本工具创建的软链接"""
        path = str(install_path)
        if not os.path.islink(path):
            return False
        resolved = os.path.realpath(path)
        if resolved == path:
            return False

        validator = config.validator
        if resolved in config.explicit_package_paths.values():
            return validator.is_valid_package(resolved)

        for directory in config.search_directories:
            if resolved.startswith(directory):
                return validator.is_valid_package(resolved)

        return False

    def link_state(self, install_path: str | Path, config: LocalSourceConfig) -> LinkState:
        path = str(install_path)
        if not os.path.lexists(path):
            return LinkState.ABSENT
        if os.path.islink(path):
            if self.is_managed_symlink(path, config):
                return LinkState.MANAGED_SYMLINK
            return LinkState.FOREIGN_SYMLINK
        return LinkState.MATERIALIZED

    @staticmethod
    @contextmanager
    def _scoped_parent(path: Path) -> Iterator[None]:
        """确保父目录存在；块内失败时删除本次新建的目录"""
        missing: list[Path] = []
        parent = path.parent
        while not parent.exists():
            missing.append(parent)
            parent = parent.parent

        created: list[Path] = []
        try:
            for d in reversed(missing):
                d.mkdir()
                created.append(d)
            yield
        except Exception:
            for d in reversed(created):
                try:
                    d.rmdir()
                except OSError as cleanup_exc:
                    logger.warning("清理目录失败: %s (%s)", d, cleanup_exc)
            raise
