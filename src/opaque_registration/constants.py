"""Default configuration constants for the OPAQUE registration engine."""

# Cipher suite bindings
DEFAULT_GROUP = "ristretto255"
DEFAULT_KEY_EXCHANGE = "3DH"
DEFAULT_HASH = "SHA-512"

# Argon2id settings (memory cost in KiB)
DEFAULT_ARGON2_MEMORY_COST = 4096
DEFAULT_ARGON2_TIME_COST = 3
DEFAULT_ARGON2_PARALLELISM = 1
ARGON2_VERSION = 0x13

# Fresh blinding scalars drawn before Start gives up
MAX_BLIND_ATTEMPTS = 8

# Client state blob format version
STATE_VERSION = 0x01

# Longest password the OPRF input encoding (2-byte length) can carry
MAX_PASSWORD_LENGTH = 0xFFFF
