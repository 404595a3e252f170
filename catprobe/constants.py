"""Wire constants shared across catprobe modules."""

# Header and cookie name used both for the initial token and for renewals.
TOKEN_NAME = "CTA-Common-Access-Token"

# Query parameter carrying the initial token for the cookie-as-query binding.
TOKEN_QUERY_PARAM = "CAT"

DEFAULT_USER_AGENT = "catprobe"

# Works with the online checker at https://cta-token.net/
DEFAULT_KEY = "403697de87af64611c1d32a05dab0fe1fcb715a86ab435f1ec99192d79569388"
DEFAULT_ISSUER = "eyevinn"
DEFAULT_SUBJECT = "user_id:asset_id:session_id"
DEFAULT_TOKEN_ID = bytes([1, 2, 3, 4])
DEFAULT_KEY_ID = "Symmetric256"

SEGMENT_MARKER = "EXTINF"

# CWT registered claim keys (RFC 8392)
CLAIM_ISS = 1
CLAIM_SUB = 2
CLAIM_EXP = 4
CLAIM_IAT = 6
CLAIM_CTI = 7

# Common Access Token renewal claim (CTA-5007)
CLAIM_CATR = 323

CATR_TYPE = 0
CATR_EXPADD = 1
CATR_DEADLINE = 2
CATR_COOKIE_NAME = 3
CATR_HEADER_NAME = 4
CATR_COOKIE_PARAMS = 5
CATR_HEADER_PARAMS = 6

# COSE header parameters and tags (RFC 9052)
COSE_HEADER_ALG = 1
COSE_HEADER_KID = 4
COSE_ALG_HMAC_256_256 = 5
COSE_MAC0_TAG = 17
CWT_TAG = 61
