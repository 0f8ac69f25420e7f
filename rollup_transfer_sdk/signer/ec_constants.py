"""
Constants for elliptic curve cryptography.
"""

# Order of the SECP256K1 elliptic curve (N value)
SECP256K1_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141

# Valid Ethereum private keys lie in [1, N-1]
SECP256K1_MIN = 1
SECP256K1_MAX = SECP256K1_N - 1

# Hex characters in a 32-byte private key, without the 0x prefix
PRIVATE_KEY_HEX_LENGTH = 64
