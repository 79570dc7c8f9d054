"""Helpers for deciding how to treat training container exits."""

_PERMANENT_EXIT_CODES = frozenset({1, 2, 126, 127, 128, 139})
_RETRYABLE_EXIT_CODES = frozenset({130, 137, 143, 138})


def is_retryable_exit_code(exit_code: int) -> bool:
    """Whether a container exit code indicates a transient, retryable failure.

    130, 137 and 143 are termination by SIGINT, SIGKILL and SIGTERM; 138
    (SIGUSR1) is reserved for user-defined retryable errors. Everything
    else, including the well-known permanent codes, is not retried.
    """
    if exit_code in _PERMANENT_EXIT_CODES:
        return False
    return exit_code in _RETRYABLE_EXIT_CODES