"""symlinker 命令行接口

CLI 按领域拆分为子模块，每个模块注册自己的命令到 main group。
"""

import os
from typing import Any

import click

from symlinker import __version__
from symlinker.core.config import DEFAULT_CONFIG_FILE, init_config
from symlinker.services.container import get_container, init_container
from symlinker.utils.logger import setup_logging


def _svc() -> Any:
    """获取全局服务容器的快捷方式"""
    return get_container()


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "config_file", default=DEFAULT_CONFIG_FILE, help="工具配置文件")
@click.option("--project", "project_file", default="", help="项目文件（缺省取配置中的 project_file）")
def main(config_file: str, project_file: str) -> None:
    """symlinker - 本地包软链接安装工具"""
    setup_logging(
        level=os.getenv("SYMLINKER_LOG_LEVEL", "INFO"),
        json_output=os.getenv("SYMLINKER_LOG_JSON", "") == "1",
    )
    init_config(config_file)
    init_container(project_file)


# 注册各领域子命令
from symlinker.cli.cmd_install import register as _reg_install  # noqa: E402
from symlinker.cli.cmd_local import register as _reg_local  # noqa: E402

_reg_install(main)
_reg_local(main)
