"""Resolution of install command flags into an InstallConfig."""

from opencode_slim.config.schemas import (
    PROVIDERS,
    BooleanArg,
    InstallArgs,
    InstallConfig,
)


class ArgumentValidationError(Exception):
    """Non-interactive arguments are missing or invalid.

    Carries every violation found, one message per offending flag.
    """

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("Validation failed:\n" + "\n".join(f"  - {e}" for e in errors))


def parse_boolean_arg(value: str) -> BooleanArg | None:
    """Parse a raw flag value, returning None if it isn't "yes" or "no"."""
    if value == "yes":
        return "yes"
    if value == "no":
        return "no"
    return None


def validate_non_tui_args(args: InstallArgs) -> list[str]:
    """Validate provider flags for non-interactive mode.

    Args:
        args: Raw install arguments

    Returns:
        List of error messages, empty if all flags are valid
    """
    errors: list[str] = []
    for provider in PROVIDERS:
        raw = args.raw_value(provider)
        if raw is None:
            errors.append(f"--{provider} is required (values: yes, no)")
        elif parse_boolean_arg(raw) is None:
            errors.append(f"Invalid --{provider} value: {raw} (expected: yes, no)")
    return errors


def args_to_config(args: InstallArgs) -> InstallConfig:
    """Map validated flags to booleans."""
    return InstallConfig.from_providers(
        {provider: args.raw_value(provider) == "yes" for provider in PROVIDERS}
    )


def resolve_args(args: InstallArgs) -> InstallConfig:
    """Validate non-interactive arguments and build an InstallConfig.

    Raises:
        ArgumentValidationError: If any flag is missing or invalid
    """
    errors = validate_non_tui_args(args)
    if errors:
        raise ArgumentValidationError(errors)
    return args_to_config(args)
