"""CLI - 本地源查询命令"""

from __future__ import annotations

import click

from symlinker.cli import _svc
from symlinker.core.exceptions import SymlinkerError
from symlinker.core.local.models import LinkState, PackageIdentity
from symlinker.core.local.resolver import PathResolver
from symlinker.core.local.symlink import SymlinkManager
from symlinker.utils.yaml_io import dump_yaml


def register(group: click.Group) -> None:
    group.add_command(resolve_local)
    group.add_command(status)
    group.add_command(show_config)


@click.command(name="resolve")
@click.argument("name")
def resolve_local(name: str) -> None:
    """解析包的本地源路径（不修改文件系统）"""
    svc = _svc()
    try:
        package = svc.project.find_package(name)
        install_path = svc.manager.get_install_path(package)
        identity = PackageIdentity.from_package(package, install_path)
        result = PathResolver(svc.local_config).resolve(identity)
    except SymlinkerError as exc:
        raise click.ClickException(str(exc)) from exc
    if result.found:
        click.echo(f"{result.path} ({result.origin})")
    else:
        click.echo(f"无本地源: {package.pretty_name}")


@click.command()
def status() -> None:
    """列出锁定包的安装状态（实体副本 / 受管软链接 / 外部软链接）"""
    svc = _svc()
    try:
        packages = svc.project.locked_packages()
        config = svc.local_config
        symlinks = SymlinkManager()
        rows = [
            (p, symlinks.link_state(svc.manager.get_install_path(p), config))
            for p in packages
        ]
    except SymlinkerError as exc:
        raise click.ClickException(str(exc)) from exc

    if not rows:
        click.echo("锁文件中没有包。")
        return
    if svc.local_installer is None:
        click.echo("（本地软链接已通过环境变量禁用）")
    for package, state in rows:
        marker = " *" if state is LinkState.MANAGED_SYMLINK else ""
        click.echo(f"  {package.pretty_name:30s} {package.version:12s} [{state.value}]{marker}")


@click.command(name="config")
def show_config() -> None:
    """显示生效的本地源配置"""
    try:
        config = _svc().local_config
    except SymlinkerError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(dump_yaml(config.to_dict()), nl=False)
