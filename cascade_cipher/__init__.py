"""
cascade_cipher
==============
Keyed cascade substitution cipher for short uppercase messages,
with an optional five-letter block-reversal layer.

Layers:
    1  SUBSTITUTION  — keyed cascade (each letter shifted by the previous cipher letter)
    2  OBFUSCATION   — pad with X to a multiple of 5, reverse every block

Around the cipher: a request boundary returning explicit results,
an in-memory message store, and a small Flask API.

Not cryptographically secure. Classical construction, for fun and teaching.
"""

__version__  = "1.0.0"
__project__  = "cascade_cipher"

from .errors                      import (CipherError, DefensiveInvariantError,
                                          ErrorKind, RequestError, ValidationError)
from .validation                  import validate
from .keytable                    import (KeyTable, ReverseKeyTable,
                                          build_key_table, build_reverse_key_table)
from .layers.layer1_substitution  import encode, decode
from .layers.layer2_groups        import apply_reversal, undo_reversal
from .cipher                      import CascadeCipher, CipherRequest, CipherResult, run
from .messages                    import Message, MessageStore

__all__ = [
    "CipherError",
    "DefensiveInvariantError",
    "ErrorKind",
    "RequestError",
    "ValidationError",
    "validate",
    "KeyTable",
    "ReverseKeyTable",
    "build_key_table",
    "build_reverse_key_table",
    "encode",
    "decode",
    "apply_reversal",
    "undo_reversal",
    "CascadeCipher",
    "CipherRequest",
    "CipherResult",
    "run",
    "Message",
    "MessageStore",
]
