import hashlib
import os

SENSITIVE_KEYS = ("PASSWORD", "SECRET", "TOKEN", "KEY", "AUTH")
SIMULATED_VULNERABILITIES = 3
DEFAULT_MAX_VULNERABILITIES = 5


def parse_int(value):
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def mask_sensitive_data(key, value):
    """Replace the value of a sensitive-looking key with a short hash token."""
    upper = key.upper()
    if any(sensitive in upper for sensitive in SENSITIVE_KEYS):
        digest = hashlib.sha256(os.fsencode(value)).digest()
        return f"[MASKED:{digest[:8].hex()}]"
    return value


def rating_for(vulnerabilities):
    if vulnerabilities == 0:
        return "A"
    if vulnerabilities <= 2:
        return "B"
    if vulnerabilities <= 5:
        return "C"
    return "D"


def check_security_thresholds(security, settings):
    """Return human-readable threshold violations for the current security state.

    Ratings compare as strings, so "C" is worse than a minimum of "B". A
    maximum vulnerability count that is unset or not an integer is ignored.
    """
    violations = []

    minimum = settings.min_security_rating
    if minimum and security.security_rating > minimum:
        violations.append(
            f"Security rating {security.security_rating} is below minimum {minimum}"
        )

    maximum = parse_int(settings.max_vulnerabilities)
    if maximum is not None and security.vulnerabilities > maximum:
        violations.append(
            f"Vulnerabilities count {security.vulnerabilities} exceeds maximum {maximum}"
        )

    return violations
