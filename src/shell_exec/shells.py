"""Platform shell lookup."""

import sys
from dataclasses import dataclass


@dataclass(frozen=True)
class PlatformShell:
    executable: str
    args: tuple[str, ...]
    merge_env: bool = False

    @property
    def command(self) -> list[str]:
        return [self.executable, *self.args]


POWERSHELL_SCRIPT = (
    "try{$input|iex; exit $LastExitCode}catch{Write-Error -Message $Error[0]; exit 1}"
)

DEFAULT_PLATFORM = "posix"

# PowerShell misbehaves without inherited variables such as TEMP, so
# explicit environments are merged over os.environ there.
SHELLS: dict[str, PlatformShell] = {
    "win32": PlatformShell(
        executable="powershell.exe",
        args=("-noprofile", "-noninteractive", "-command", POWERSHELL_SCRIPT),
        merge_env=True,
    ),
    DEFAULT_PLATFORM: PlatformShell(executable="/bin/bash", args=("-s",)),
}


def select_shell(platform: str | None = None) -> PlatformShell:
    """Return the shell used to run scripts on ``platform``.

    Defaults to the running interpreter's ``sys.platform``; any platform
    without its own entry gets the POSIX shell.
    """
    key = sys.platform if platform is None else platform
    return SHELLS.get(key, SHELLS[DEFAULT_PLATFORM])
