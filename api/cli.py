#!/usr/bin/env python3
"""CLI for certificate renderer tasks.

Usage:
    python -m cli <command>

Commands:
    render    Render a certificate PDF to a local file (no server needed)
"""

import argparse
import logging
import sys
from dataclasses import replace
from datetime import date
from pathlib import Path

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def cmd_render(args: argparse.Namespace) -> int:
    """Render a certificate PDF from command-line values."""
    from core.config import get_settings
    from rendering.certificates import generate_certificate_pdf
    from rendering.errors import CertificateRenderError
    from services.certificates_service import (
        EnrollmentRecord,
        build_certificate_request,
    )

    settings = get_settings()
    enrollment = EnrollmentRecord(
        slug=args.certificate_id,
        user_email=args.email,
        course_title=args.course,
        completed_at=args.date,
        user_name=args.name,
    )
    request = build_certificate_request(
        enrollment,
        base_url=settings.public_base_url or "http://localhost:8000",
        settings=settings,
    )
    if args.url:
        request = replace(request, verification_url=args.url)

    try:
        pdf_content = generate_certificate_pdf(
            request, invariant=args.invariant or settings.pdf_invariant
        )
    except CertificateRenderError as e:
        logger.error(f"Certificate rendering failed: {e}")
        return 1

    output = Path(args.output)
    output.write_bytes(pdf_content)
    logger.info(f"PDF saved to {output} ({len(pdf_content)} bytes)")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Certificate renderer CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    render = subparsers.add_parser(
        "render",
        help="Render a certificate PDF to a local file",
    )
    render.add_argument("--email", required=True, help="Recipient email address")
    render.add_argument("--course", required=True, help="Course title")
    render.add_argument("--name", default=None, help="Recipient name (optional)")
    render.add_argument(
        "--date",
        type=date.fromisoformat,
        default=date.today(),
        help="Completion date as YYYY-MM-DD (default: today)",
    )
    render.add_argument("--certificate-id", default="sample-certificate")
    render.add_argument("--url", default=None, help="Override verification URL")
    render.add_argument("--output", default="certificate.pdf")
    render.add_argument(
        "--invariant",
        action="store_true",
        help="Pin timestamps so identical input gives identical bytes",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "render":
        return cmd_render(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
