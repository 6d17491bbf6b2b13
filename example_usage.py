#!/usr/bin/env python3
"""
Basic usage examples for the AWS3 signer.

This script signs a few requests offline and prints the resulting headers.
No network access is needed.
"""

from aws3_signer import (
    AWS3Signer,
    AnonymousCredentials,
    Credentials,
    SessionCredentials,
    SignableRequest,
    SigningError,
)


def print_headers(request):
    for name, value in request.headers.items():
        print(f"   {name}: {value}")
    print()


def main():
    """Run basic usage examples."""
    credentials = Credentials("AKIDEXAMPLE", "wJalrXUtnFEMI/K7MDENG+bPxRfiCYEXAMPLEKEY")

    print("=== AWS3 Signer Basic Usage Examples ===\n")

    # Example 1: canonical request signing (AWS3)
    print("1. Signing a query-protocol request (AWS3)...")
    signer = AWS3Signer()
    signer.override_date("Fri, 15 Dec 2023 12:00:00 GMT")
    request = SignableRequest(
        "https://rds.amazonaws.com",
        http_method="POST",
        parameters=[("Action", "DescribeEventSubscriptions"), ("Version", "2013-09-09")],
    )
    signer.sign(request, credentials)
    print("   String to sign:")
    for line in signer.string_to_sign(request).split("\n"):
        print(f"   | {line}")
    print_headers(request)

    # Example 2: date+nonce signing (AWS3-HTTPS) with a session token
    print("2. Signing with temporary credentials (AWS3-HTTPS)...")
    request = SignableRequest("https://rds.amazonaws.com", resource_path="/")
    signer.sign(
        request,
        SessionCredentials(credentials.access_key_id, credentials.secret_key, "tok123"),
        use_https_nonce=True,
    )
    print_headers(request)

    # Example 3: anonymous credentials leave the request alone
    print("3. Signing with anonymous credentials...")
    request = SignableRequest("https://rds.amazonaws.com", headers={"Accept": "text/xml"})
    signer.sign(request, AnonymousCredentials())
    print_headers(request)

    # Example 4: signing errors
    print("4. Signing a request with an unsupported endpoint...")
    try:
        signer.sign(SignableRequest("ftp://rds.amazonaws.com"), credentials)
    except SigningError as e:
        print(f"   ✗ {type(e).__name__}: {e}")


if __name__ == "__main__":
    main()
