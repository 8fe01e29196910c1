"""CLI - 安装 / 更新 / 删除命令"""

from __future__ import annotations

import sys

import click

from symlinker.cli import _svc
from symlinker.core.exceptions import SymlinkerError


def register(group: click.Group) -> None:
    group.add_command(install)
    group.add_command(update)
    group.add_command(remove)


@click.command()
@click.argument("names", nargs=-1)
def install(names: tuple[str, ...]) -> None:
    """安装锁文件中的包（不指定则安装全部），有本地源的包安装为软链接"""
    svc = _svc()
    try:
        if names:
            packages = [svc.project.find_package(n) for n in names]
        else:
            packages = svc.project.locked_packages()
        results = svc.manager.install_all(packages)
    except SymlinkerError as exc:
        raise click.ClickException(str(exc)) from exc

    if not results:
        click.echo("没有需要安装的包。")
        return
    failed = 0
    for name, result in results.items():
        if isinstance(result, str):
            failed += 1
            click.echo(f"  {name}: {result}", err=True)
        else:
            click.echo(f"  {result.message}")
    if failed:
        sys.exit(1)


@click.command()
@click.argument("name")
@click.option("--target-name", default=None, help="目标包名（包改名时使用）")
@click.option("--target-version", default=None, help="目标版本")
def update(name: str, target_name: str | None, target_version: str | None) -> None:
    """将锁定包从当前描述更新到目标描述"""
    svc = _svc()
    try:
        initial = svc.project.find_package(name)
        target = initial.replace(
            pretty_name=target_name or initial.pretty_name,
            version=target_version or initial.version,
        )
        report = svc.manager.update(initial, target)
    except SymlinkerError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(report.message)


@click.command()
@click.argument("name")
def remove(name: str) -> None:
    """删除包；受管软链接只删除链接本身"""
    svc = _svc()
    try:
        package = svc.project.find_package(name)
        report = svc.manager.remove(package)
    except SymlinkerError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(report.message)
