import click
import json
import sys

from vfshell.config import get_config_path, load_config
from vfshell.exit_codes import USAGE_ERROR


@click.group("config")
def config_cmd():
    """Configuration management commands."""
    pass


@config_cmd.command("show")
@click.argument("section", required=False)
@click.option("--pretty", is_flag=True, help="Display as formatted JSON instead of single-line JSONL")
@click.option("--path", is_flag=True, help="Show the config file path being used")
def show_config(section, pretty, path):
    """Show the effective configuration (defaults, file, VFSHELL_* overrides).

    Pass SECTION (e.g. 'shell' or 'logging') to show a single section.
    Use --path to see which config file is being used.
    """
    if path:
        config_path = get_config_path()
        print(json.dumps({"config_path": str(config_path), "exists": config_path.exists()}))
        return

    config = load_config()
    if section:
        if section not in config:
            click.echo(f"Error: unknown config section: {section}", err=True)
            sys.exit(USAGE_ERROR)
        config = config[section]

    print(json.dumps(config, indent=2 if pretty else None, ensure_ascii=False))
