from prometheus_client import Counter, Histogram

# Sign / verify specific latency
SIGN_LATENCY_SECONDS = Histogram(
    "jwtlab_sign_latency_seconds",
    "JWT signing latency (seconds)",
    ["family"],
)

VERIFY_LATENCY_SECONDS = Histogram(
    "jwtlab_verify_latency_seconds",
    "JWT verification latency (seconds)",
    ["family"],
)

TOKENS_SIGNED_TOTAL = Counter(
    "jwtlab_tokens_signed_total",
    "Total tokens signed by algorithm",
    ["alg"],
)

# result is "valid" or "invalid"
VERIFICATIONS_TOTAL = Counter(
    "jwtlab_verifications_total",
    "Total signature verifications by algorithm and outcome",
    ["alg", "result"],
)

# Errors by type (decode_error, key_format_error, ...)
ERRORS_TOTAL = Counter(
    "jwtlab_errors_total",
    "Total jwtlab errors by type",
    ["type"],
)
