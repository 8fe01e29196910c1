"""插件激活

激活时读取一次开关环境变量；未禁用则从项目 extra 段构建本地源配置，
取当前安装器快照作为委托查找表，注册 LocalAwareInstaller。
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

from symlinker.core.config import Config, get_config
from symlinker.core.coordinator import LocalAwareInstaller
from symlinker.core.installer import DefaultInstaller
from symlinker.core.local.settings import LocalSourceConfig
from symlinker.core.manager import InstallationManager
from symlinker.core.project import HostProject

logger = logging.getLogger(__name__)


def is_disabled(env_name: str, environ: Mapping[str, str] | None = None) -> bool:
    env = os.environ if environ is None else environ
    return bool(env.get(env_name, ""))


def build_local_config(project: HostProject, config: Config) -> LocalSourceConfig:
    return LocalSourceConfig.from_extra(
        project.extra,
        base_dir=project.root_dir,
        manifest_name=config.manifest_name,
    )


def activate(
    manager: InstallationManager,
    project: HostProject,
    config: Config | None = None,
    environ: Mapping[str, str] | None = None,
) -> LocalAwareInstaller | None:
    """注册本地感知安装器，禁用时返回 None

    异常:
        InvalidConfigurationError: local-dirs 配置无效，运行应立即中止
    """
    config = config or get_config()
    if is_disabled(config.disable_env, environ):
        logger.info("环境变量 %s 已设置，本地软链接已禁用", config.disable_env)
        return None

    local_config = build_local_config(project, config)
    installer = LocalAwareInstaller(local_config, manager.snapshot())
    manager.add_installer(installer)
    logger.debug(
        "本地软链接已启用: dirs=%s vendors=%s packages=%d",
        list(local_config.search_directories),
        sorted(local_config.vendor_allow_list),
        len(local_config.explicit_package_paths),
    )
    return installer


def build_manager(
    project: HostProject,
    config: Config | None = None,
    environ: Mapping[str, str] | None = None,
) -> tuple[InstallationManager, LocalAwareInstaller | None]:
    """构建安装管理器: 默认安装器 + （未禁用时）本地感知安装器"""
    config = config or get_config()
    manager = InstallationManager()
    manager.add_installer(DefaultInstaller(project.vendor_dir, config.package_type))
    return manager, activate(manager, project, config, environ)
