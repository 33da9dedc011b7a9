from dataclasses import dataclass
from string import Template

from config import RecoveryConfig
from custom_logging import PASSWORD_FLAG, redact_command

TARGET_KEY = "target"
SOURCE_KEY = "source"


def placeholder_token(name: str) -> str:
    return "${" + name + "}"


@dataclass(frozen=True)
class CommandTemplate:
    """
    Executable plus a fixed argument list with exactly one substitutable slot.

    The slot token holds ``${<placeholder>}`` (possibly inside a larger token,
    e.g. ``source ${source}``) and is the only token ever rewritten. The first
    ``literal`` arguments are credentials passed through verbatim, so a password
    that happens to contain the marker is never taken for the slot.
    """
    executable: str
    arguments: tuple
    placeholder: str
    slot: int
    literal: int = 0

    def __post_init__(self):
        marker = placeholder_token(self.placeholder)
        assert self.literal <= self.slot < len(self.arguments), "placeholder slot out of range"
        holders = [i for i in range(self.literal, len(self.arguments)) if marker in self.arguments[i]]
        assert holders == [self.slot], f"{marker} must appear exactly once, at the slot"

    def render(self, value: str) -> list[str]:
        """Return the full argv with the placeholder replaced by value."""
        argv = [self.executable, *self.arguments]
        argv[self.slot + 1] = Template(self.arguments[self.slot]).substitute({self.placeholder: value})
        return argv

    def redacted(self, value: str) -> str:
        """Printable command line with the password token masked."""
        return redact_command(self.render(value))


@dataclass(frozen=True)
class CommandTemplates:
    backup: CommandTemplate
    restore: CommandTemplate


def _credential_arguments(config: RecoveryConfig) -> list[str]:
    # flag and value stay glued together, that is what mysql/mysqldump expect
    args = [
        "-u" + config.username,
        PASSWORD_FLAG + config.password,
        "-h" + config.hostname,
    ]
    if not config.uses_default_port:
        args.append(f"-P{config.port}")
    return args


def build_backup_template(config: RecoveryConfig) -> CommandTemplate:
    credentials = _credential_arguments(config)
    arguments = credentials + [
        "--add-drop-table",
        "-r",
        placeholder_token(TARGET_KEY),
        config.schema,
    ]
    return CommandTemplate(
        executable=config.backup_command,
        arguments=tuple(arguments),
        placeholder=TARGET_KEY,
        slot=len(arguments) - 2,
        literal=len(credentials),
    )


def build_restore_template(config: RecoveryConfig) -> CommandTemplate:
    credentials = _credential_arguments(config)
    arguments = credentials + [
        config.schema,
        "-e",
        "source " + placeholder_token(SOURCE_KEY),
    ]
    return CommandTemplate(
        executable=config.restore_command,
        arguments=tuple(arguments),
        placeholder=SOURCE_KEY,
        slot=len(arguments) - 1,
        literal=len(credentials),
    )


def build_templates(config: RecoveryConfig) -> CommandTemplates:
    """Derive the backup and restore templates for a validated config."""
    return CommandTemplates(
        backup=build_backup_template(config),
        restore=build_restore_template(config),
    )
