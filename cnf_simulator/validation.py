"""Post-deployment checks against a running simulator.

Run after a rollout to confirm that ``/health`` reports healthy and that
``/status`` describes the instance::

    cnf-validate --base-url http://cnf-simulator.example:8080
"""
import argparse
import os
import sys

import requests

DEFAULT_BASE_URL = "http://localhost:8080"


class ValidationError(Exception):
    pass


def _get_json(base_url, path, timeout):
    url = f"{base_url.rstrip('/')}{path}"
    try:
        response = requests.get(url, timeout=timeout)
    except requests.RequestException as e:
        raise ValidationError(f"failed to connect to {path} endpoint: {e}") from e

    if response.status_code != 200:
        raise ValidationError(f"{path} endpoint returned status code {response.status_code}")

    try:
        data = response.json()
    except ValueError as e:
        raise ValidationError(f"failed to parse {path} response: {e}") from e

    if not isinstance(data, dict):
        raise ValidationError(f"failed to parse {path} response: expected a JSON object")
    return data


def validate_health(base_url, timeout=5):
    health = _get_json(base_url, "/health", timeout)
    if health.get("status") != "healthy":
        raise ValidationError(f"health status is not 'healthy': got '{health.get('status')}'")
    return health


def validate_status(base_url, timeout=5):
    status = _get_json(base_url, "/status", timeout)
    if not status.get("name"):
        raise ValidationError("status response missing name field")
    return status


def run(base_url, timeout=5):
    print("Starting API endpoint validation...")
    try:
        health = validate_health(base_url, timeout)
        print(f"✓ Health endpoint validation passed: {health['status']}")
        status = validate_status(base_url, timeout)
        print(f"✓ Status endpoint validation passed: {status['name']}")
    except ValidationError as e:
        print(f"✗ Validation failed: {e}")
        return 1
    print("All API endpoint validations passed!")
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(description="Validate a running CNF simulator deployment")
    parser.add_argument("--base-url", default=os.getenv("CNF_BASE_URL", DEFAULT_BASE_URL))
    parser.add_argument("--timeout", type=float, default=5.0, help="per-request timeout in seconds")
    args = parser.parse_args(argv)
    return run(args.base_url, args.timeout)


if __name__ == "__main__":
    sys.exit(main())
