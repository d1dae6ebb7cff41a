"""Exception hierarchy for panel record management.

Every error is fatal to the invocation. The orchestrator that calls the hook
is responsible for any retry.
"""


class PanelDnsError(Exception):
    """Base class for all errors raised by panel_dns."""


class CredentialsNotSet(PanelDnsError):
    """No usable credentials in the configured store."""


class InsecureCredentialsError(PanelDnsError):
    """Stored credentials are readable by principals other than the owner."""


class TransportError(PanelDnsError):
    """The panel could not be reached (connection, DNS or transport timeout)."""


class AuthenticationError(PanelDnsError):
    """The panel rejected the login."""


class TermsNotAcceptedError(PanelDnsError):
    """The account has pending terms and approval was declined."""


class ZoneNotFoundError(PanelDnsError):
    """No hosted zone is a suffix of the requested name."""


class RecordNotFoundError(PanelDnsError):
    """No record in the zone listing matches the name and value."""


class RecordMutationError(PanelDnsError):
    """A create or delete request did not return the success marker."""


class RecordCreationError(RecordMutationError):
    pass


class RecordDeletionError(RecordMutationError):
    pass
