"""
CLI utilities for command line reconstruction and introspection.
"""

from pathlib import Path

import click

PROGRAM_NAME = "k8s_schema_to_code"


def reconstruct_command_line(click_command: click.Command) -> str:
    """
    Reconstruct command line from current Click context using introspection.

    Only options that differ from their default are included, and existing
    paths are shortened to their file name so the output is stable across
    machines.

    Args:
        click_command: Click command object for introspection

    Returns:
        Reconstructed command line string
    """
    try:
        ctx = click.get_current_context()
        cli_args = ctx.params
    except RuntimeError:
        # No active context, return basic command
        return PROGRAM_NAME

    if not cli_args:
        return PROGRAM_NAME

    cmd_parts = [PROGRAM_NAME]

    for param in click_command.params:
        param_name = param.name
        if param_name not in cli_args or not isinstance(param, click.Option):
            continue

        value = cli_args[param_name]
        if value is None or value == param.default:
            continue

        flag = param.opts[0] if param.opts else f"--{param_name}"
        if param.is_flag:
            if value:
                cmd_parts.append(flag)
            elif param.secondary_opts:
                cmd_parts.append(param.secondary_opts[0])
            continue

        if isinstance(value, (str, Path)):
            path_obj = Path(str(value))
            formatted_value = path_obj.name if path_obj.exists() else str(value)
        else:
            formatted_value = str(value)
        cmd_parts.extend([flag, formatted_value])

    return " ".join(cmd_parts)
