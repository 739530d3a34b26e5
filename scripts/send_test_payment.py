#!/usr/bin/env python3
"""
Dev helper: issue a payment link and submit a sample payment to the local backend.

Calls POST /api/generate-link, then POST /api/submit-payment with the
returned identifier, sample customer data and two images. Real mail is sent
if the backend has EMAIL_USER / EMAIL_PASS / RESPONSIBLE_EMAIL configured.

Usage
-----
# Basic: generated placeholder images, targeting localhost:3001
python scripts/send_test_payment.py

# Use real images
python scripts/send_test_payment.py --card-photo path/to/card.jpg --selfie path/to/selfie.jpg

# Submit against an existing link instead of issuing a new one
python scripts/send_test_payment.py --link-id 0b6c7a9e-3f8d-4c1e-9a2b-5d4e6f708192

# Customer address that should receive the confirmation
python scripts/send_test_payment.py --email you@example.com

# Target a different backend URL
python scripts/send_test_payment.py --url http://staging.example.com
"""

import argparse
import json
import mimetypes
import sys
import textwrap
from pathlib import Path

import httpx

# Smallest valid JPEG header followed by padding; enough for the image/* check.
_PLACEHOLDER_JPEG = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00" + b"\x00" * 1024 + b"\xff\xd9"


def _load_image(path: str | None, fallback_name: str) -> tuple[str, bytes, str]:
    """Return a (filename, bytes, content_type) tuple for httpx."""
    if not path:
        return fallback_name, _PLACEHOLDER_JPEG, "image/jpeg"
    file_path = Path(path)
    content_type = mimetypes.guess_type(file_path.name)[0] or "application/octet-stream"
    return file_path.name, file_path.read_bytes(), content_type


def _print_response(response: httpx.Response) -> None:
    status = response.status_code
    symbol = "OK" if status == 200 else "FAIL"
    print(f"\n[{symbol}] HTTP {status}")
    try:
        print(json.dumps(response.json(), indent=2, ensure_ascii=False))
    except ValueError:
        print(response.text)


def main() -> int:
    parser = argparse.ArgumentParser(
        prog="send_test_payment.py",
        description="Issue a payment link and submit a sample payment.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""\
            Examples:
              python scripts/send_test_payment.py
              python scripts/send_test_payment.py --email you@example.com
              python scripts/send_test_payment.py --card-photo card.jpg --selfie selfie.png
        """),
    )
    parser.add_argument("--url", default="http://localhost:3001",
                        help="Backend base URL (default: http://localhost:3001)")
    parser.add_argument("--link-id", default=None,
                        help="Submit against this identifier instead of issuing a new link")
    parser.add_argument("--name", default="Maria Teste")
    parser.add_argument("--email", default="cliente@example.com")
    parser.add_argument("--phone", default="+55 11 90000-0000")
    parser.add_argument("--card", dest="card_digits", default="4111 1111 1111 1111")
    parser.add_argument("--card-photo", dest="card_photo", default=None, metavar="PATH",
                        help="Image for fotoCartao (placeholder JPEG if omitted)")
    parser.add_argument("--selfie", default=None, metavar="PATH",
                        help="Image for selfieDocumento (placeholder JPEG if omitted)")
    args = parser.parse_args()

    base = args.url.rstrip("/")

    for path in (args.card_photo, args.selfie):
        if path and not Path(path).exists():
            print(f"ERROR: File not found: {path}", file=sys.stderr)
            return 1

    try:
        with httpx.Client(timeout=60) as client:
            link_id = args.link_id
            if not link_id:
                issued = client.post(f"{base}/api/generate-link")
                _print_response(issued)
                if issued.status_code != 200:
                    return 1
                link_id = issued.json()["identifier"]

            print(f"\nSubmitting payment for link {link_id}")
            response = client.post(
                f"{base}/api/submit-payment",
                data={
                    "nome": args.name,
                    "email": args.email,
                    "telefone": args.phone,
                    "cartao": args.card_digits,
                    "linkId": link_id,
                },
                files=[
                    ("fotoCartao", _load_image(args.card_photo, "card.jpg")),
                    ("selfieDocumento", _load_image(args.selfie, "selfie.jpg")),
                ],
            )
            _print_response(response)
            return 0 if response.status_code == 200 else 1
    except httpx.ConnectError:
        print(
            f"\nERROR: Could not connect to {base}\n"
            "Is the backend running? Start it with:\n"
            "  paylink    (or: uvicorn paylink.main:app --app-dir backend --port 3001)",
            file=sys.stderr,
        )
        return 1


if __name__ == "__main__":
    sys.exit(main())
