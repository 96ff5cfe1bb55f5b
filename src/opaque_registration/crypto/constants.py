"""Cryptographic constants for the OPAQUE registration engine."""

# ristretto255 encodings
ELEMENT_SIZE = 32
SCALAR_SIZE = 32
# Input size for from_hash and scalar_reduce
UNIFORM_BYTES_SIZE = 64

# SHA-512 digest and block sizes
HASH_SIZE = 64
HASH_BLOCK_SIZE = 128

# Seed length for the client key pair derivation
SEED_SIZE = 32

# Envelope: nonce || auth_tag
ENVELOPE_NONCE_SIZE = 32
ENVELOPE_SIZE = ENVELOPE_NONCE_SIZE + HASH_SIZE

# OPRF context (RFC 9497, base mode)
OPRF_MODE_BASE = 0x00
OPRF_SUITE_ID = b"ristretto255-SHA512"
OPRF_CONTEXT = b"OPRFV1-" + bytes([OPRF_MODE_BASE]) + b"-" + OPRF_SUITE_ID

HASH_TO_GROUP_DST = b"HashToGroup-" + OPRF_CONTEXT
DERIVE_KEY_PAIR_DST = b"DeriveKeyPair" + OPRF_CONTEXT
FINALIZE_LABEL = b"Finalize"

# OPAQUE key schedule labels
DERIVE_DH_KEY_PAIR_INFO = b"OPAQUE-DeriveDiffieHellmanKeyPair"
ENVELOPE_NONCE_LABEL = b"EnvelopeNonce"
AUTH_KEY_LABEL = b"AuthKey"
EXPORT_KEY_LABEL = b"ExportKey"
PRIVATE_KEY_LABEL = b"PrivateKey"

# Argon2 minimum salt length; the salt itself is all zeros
SLOW_HASH_SALT_SIZE = 8
SLOW_HASH_SALT = bytes(SLOW_HASH_SALT_SIZE)
