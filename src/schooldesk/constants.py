"""Constants for schooldesk."""

from datetime import timedelta

__all__ = [
    "CONFIG_PATH",
    "HTTP_TIMEOUT",
    "IDENTIFIER_LENGTH",
    "LOOKUP_ERROR_PREFIX",
    "LOOKUP_NOT_FOUND_MESSAGE",
    "UPDATE_ERROR_PREFIX",
]

CONFIG_PATH = "/etc/schooldesk/schooldesk.yaml"
"""Default configuration path."""

HTTP_TIMEOUT = timedelta(seconds=20)
"""Default timeout for requests to the directory API."""

IDENTIFIER_LENGTH = 11
"""Number of digits in a canonical identifier (CPF)."""

LOOKUP_ERROR_PREFIX = "Erro ao buscar usuário: "
"""Prefix of every user-visible lookup error message."""

LOOKUP_NOT_FOUND_MESSAGE = (
    "Usuário não encontrado ou não corresponde ao tipo selecionado"
)
"""Reason shown when a lookup finds no user of the selected role.

A record stored under a different role is reported with the same message so
that a mismatch is indistinguishable from a missing user.
"""

UPDATE_ERROR_PREFIX = "Erro ao atualizar usuário: "
"""Prefix of every user-visible update error message."""
