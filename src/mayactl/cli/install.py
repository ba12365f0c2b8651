"""Install this machine as a Maya server"""

import click
from rich.console import Console
from rich.table import Table

from mayactl.installer import InstallContext, MayaInstaller

console = Console()


class InstallCommand(click.Command):
    """Command whose usage errors exit 1"""

    def parse_args(self, ctx, args):
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = 1
            raise


@click.command("install-maya", cls=InstallCommand)
@click.option(
    "--member-ips",
    "-member-ips",
    "member_ips",
    default="",
    help="Comma separated IP addresses of the other server members. "
    "Do not include the IP address of this machine.",
)
@click.option(
    "--self-ip",
    "-self-ip",
    "self_ip",
    default="",
    help="IP address of this machine. Discovered when omitted.",
)
@click.option("--dry-run", is_flag=True, help="Show the install steps without running them")
@click.argument("extra_args", nargs=-1, metavar="")
@click.pass_context
def install_maya(ctx, member_ips, self_ip, dry_run, extra_args):
    """Installs maya server on this machine.

    The machine where this command is run will become a maya server.
    """
    # No positional arguments are accepted
    if extra_args:
        click.echo(ctx.get_help(), err=True)
        ctx.exit(1)

    obj = ctx.obj or {}
    installer = MayaInstaller(
        InstallContext.from_options(member_ips, self_ip),
        runner=obj.get("runner"),
        fetcher=obj.get("fetcher"),
        console=console,
    )

    if dry_run:
        show_plan(installer)
        return

    ctx.exit(installer.run())


def show_plan(installer: MayaInstaller):
    """Print the install steps as a table"""
    table = Table(title="Maya Install Steps", show_header=True)
    table.add_column("Step", style="cyan")
    table.add_column("Stage", style="blue")
    table.add_column("Description")
    table.add_column("Command")

    for index, (stage, description, command) in enumerate(installer.plan(), start=1):
        table.add_row(str(index), stage, description, command)

    console.print(table)

    ctx = installer.context
    console.print(f"\n[bold]Members:[/bold] {', '.join(ctx.peer_ips) or '(none)'}")
    console.print(f"[bold]Self IP:[/bold] {ctx.self_ip or '(discovered at install time)'}")
