"""Handlers for 'wikiban config' commands."""

from wikiban.cli._common import error, output_json, output_result
from wikiban.config import read_config, setting_names, write_config_key


def config_get(args) -> int:
    """Show one setting, or all of them."""
    settings = read_config(args.repo or ".")
    if args.key is None:
        if args.json:
            output_json(settings)
        else:
            for key, value in settings.items():
                print(f"{key.replace('_', '-')} = {value}")
        return 0

    key = args.key.replace("-", "_")
    if key not in settings:
        error(f"Unknown setting '{args.key}'.", args.json)
    if args.json:
        output_json({args.key: settings[key]})
    else:
        print(settings[key])
    return 0


def config_set(args) -> int:
    """Write one setting to git config."""
    key = args.key.replace("-", "_")
    if key not in setting_names():
        known = ", ".join(sorted(k.replace("_", "-") for k in setting_names()))
        error(f"Unknown setting '{args.key}'. Known: {known}", args.json)
    write_config_key(key, args.value, path=args.repo)
    scope = "repository" if args.repo else "global"
    output_result({args.key: args.value}, f"Set wikiban.{args.key} ({scope})", args.json)
    return 0
