"""Exceptions raised by the decider."""


class DeciderError(Exception):
    """Base class for decider failures."""


class ContractViolation(DeciderError):
    """The host broke the decider's calling contract.

    Raised for a missing transmission or request and for a second sense
    request arriving while another one is still outstanding.  Never handled
    inside the package: the run cannot continue.
    """
