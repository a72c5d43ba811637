from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

# Ensure imports work when this file is executed directly (sys.path[0] becomes
# the scripts/ directory, not the repo root).
WORKSPACE_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(WORKSPACE_ROOT))

from simplemail import Mail, Mailer, load_config
from simplemail.transport import EmlTransport


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Send one test mail using SIMPLEMAIL_* settings")
    parser.add_argument("to", help="recipient address")
    parser.add_argument("--outbox", default=None, help="write .eml files here instead of using SMTP")
    args = parser.parse_args(argv)

    cfg = load_config(env_file=str(WORKSPACE_ROOT / ".env"))
    logging.basicConfig(level=cfg.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    transport = EmlTransport(out_dir=Path(args.outbox)) if args.outbox else None
    mailer = Mailer.from_config(cfg, transport=transport)

    stamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%SZ")
    mail = (
        Mail()
        .add_to(args.to)
        .with_subject(f"simplemail test {stamp}")
        .with_text(f"Test message sent at {stamp} via {mailer.host}.")
        .with_html(f"<p>Test message sent at <b>{stamp}</b> via {mailer.host}.</p>")
    )
    return 0 if mailer.deliver(mail) else 1


if __name__ == "__main__":
    try:
        raise SystemExit(main())
    except KeyboardInterrupt:
        raise SystemExit(130)
    except Exception as exc:  # noqa: BLE001
        print(f"send_test_mail failed: {exc}", file=sys.stderr)
        raise SystemExit(1)
