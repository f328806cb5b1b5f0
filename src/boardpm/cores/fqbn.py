"""Fully qualified board name (FQBN) parsing.

An FQBN has the form ``packager:architecture:board_id`` optionally followed
by ``:menu_options``, where menu options are ``key=value`` pairs separated by
commas (e.g. ``arduino:avr:nano:cpu=atmega328old``). Menu options do not take
part in board lookup and are not validated: an option without ``=`` is kept
with an empty value and empty entries are skipped.
"""

from dataclasses import dataclass, field

from ..errors import InvalidFQBNError


@dataclass(frozen=True)
class FQBN:
    """Parsed fully qualified board name.

    Attributes:
        packager: Package name (e.g. "arduino")
        architecture: Platform architecture (e.g. "avr")
        board_id: Board identifier within the platform (e.g. "uno")
        options: Menu option selections, in declaration order
    """

    packager: str
    architecture: str
    board_id: str
    options: dict[str, str] = field(default_factory=dict, hash=False)

    @classmethod
    def parse(cls, fqbn: str) -> "FQBN":
        """Parse an FQBN string.

        Args:
            fqbn: String of 3 or 4 colon separated, non-empty segments

        Returns:
            Parsed FQBN

        Raises:
            InvalidFQBNError: If the string does not have the FQBN shape
        """
        parts = fqbn.split(":")
        if len(parts) < 3 or len(parts) > 4 or any(not part for part in parts):
            raise InvalidFQBNError(f"incorrect format for fqbn: '{fqbn}'")

        options: dict[str, str] = {}
        if len(parts) == 4:
            for option in parts[3].split(","):
                if not option:
                    continue
                key, _, value = option.partition("=")
                options[key] = value

        return cls(packager=parts[0], architecture=parts[1], board_id=parts[2], options=options)

    def __str__(self) -> str:
        base = f"{self.packager}:{self.architecture}:{self.board_id}"
        if not self.options:
            return base
        return base + ":" + ",".join(f"{k}={v}" for k, v in self.options.items())
