"""服务容器 - 统一依赖注入

项目、安装管理器、本地源配置都通过容器获取，同一容器内实例共享。
CLI 通过 get_container() 获取，而非直接 import 构造。

依赖关系图（→ 表示依赖）:
  manager       → project, config
  local_config  → manager（已启用时复用已注册安装器的配置）

用法:
    container = ServiceContainer(project_file="composer.json")
    report = container.manager.install(package)

    from symlinker.services.container import get_container
    svc = get_container()
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from symlinker.core.config import Config
    from symlinker.core.coordinator import LocalAwareInstaller
    from symlinker.core.local.settings import LocalSourceConfig
    from symlinker.core.manager import InstallationManager
    from symlinker.core.project import HostProject

logger = logging.getLogger(__name__)


class ServiceContainer:
    """懒加载服务容器"""

    def __init__(
        self,
        config: Config | None = None,
        project_file: str = "",
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._instances: dict[str, object] = {}
        if config is None:
            from symlinker.core.config import get_config
            config = get_config()
        self._config = config
        self._project_file = project_file or config.project_file
        self._environ = environ

    @property
    def config(self) -> Config:
        return self._config

    @property
    def project(self) -> HostProject:
        if "project" not in self._instances:
            from symlinker.core.project import HostProject
            self._instances["project"] = HostProject.load(
                self._project_file,
                lock_file=self._config.lock_file,
                default_vendor_dir=self._config.vendor_dir,
            )
        return self._instances["project"]  # type: ignore[return-value]

    @property
    def manager(self) -> InstallationManager:
        if "manager" not in self._instances:
            from symlinker.core.plugin import build_manager
            manager, local = build_manager(self.project, self._config, self._environ)
            self._instances["manager"] = manager
            self._instances["local"] = local
        return self._instances["manager"]  # type: ignore[return-value]

    @property
    def local_installer(self) -> LocalAwareInstaller | None:
        """已注册的本地感知安装器；环境变量禁用时为 None"""
        _ = self.manager
        return self._instances["local"]  # type: ignore[return-value]

    @property
    def local_config(self) -> LocalSourceConfig:
        if "local_config" not in self._instances:
            local = self.local_installer
            if local is not None:
                self._instances["local_config"] = local.config
            else:
                from symlinker.core.plugin import build_local_config
                self._instances["local_config"] = build_local_config(
                    self.project, self._config,
                )
        return self._instances["local_config"]  # type: ignore[return-value]


# ---- 全局单例 ----

_global: ServiceContainer | None = None
_global_lock = threading.Lock()


def get_container() -> ServiceContainer:
    """获取全局 ServiceContainer 单例（线程安全）"""
    global _global  # noqa: PLW0603
    if _global is not None:
        return _global
    with _global_lock:
        if _global is None:
            _global = ServiceContainer()
        return _global


def init_container(project_file: str = "") -> ServiceContainer:
    """以指定项目文件重建全局容器（CLI 入口调用）"""
    global _global  # noqa: PLW0603
    with _global_lock:
        _global = ServiceContainer(project_file=project_file)
        return _global


def reset_container() -> None:
    """重置全局容器（仅用于测试）"""
    global _global  # noqa: PLW0603
    with _global_lock:
        _global = None
