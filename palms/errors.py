"""Exception hierarchy for the PALMS scoring engine."""


class PalmsError(Exception):
    """Base class for all PALMS errors."""


class RosterError(PalmsError):
    """Roster definition or snapshot is invalid (e.g. duplicate member names)."""


class MemberNotFoundError(PalmsError):
    """A named member does not exist in any team."""

    def __init__(self, name: str):
        super().__init__(f'Member "{name}" not found in any team')
        self.name = name


class UploadError(PalmsError):
    """An upload batch could not be processed."""


class EmptyUploadError(UploadError):
    """The uploaded report contains no data rows."""


class FileDecodeError(UploadError):
    """A report file could not be read or decoded into rows."""
