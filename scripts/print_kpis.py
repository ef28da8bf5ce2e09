"""Utility script to print the dashboard view for one filter selection as JSON."""

from __future__ import annotations

import argparse
import json

from cpm_dashboard import config as cfg
from cpm_dashboard import logs, page


def main() -> None:
    parser = argparse.ArgumentParser(description="Print cost-per-minute KPIs for a filter selection")
    parser.add_argument("--profile", default=None, help="Dashboard profile (defaults to CPM_PROFILE)")
    parser.add_argument("--period", default=None)
    parser.add_argument("--unit", default=None)
    parser.add_argument("--currency", default=None)
    parser.add_argument("--log-level", default=None)
    args = parser.parse_args()

    logs.configure_logging(args.log_level)
    config = cfg.load_dashboard_config()
    profile_key = args.profile or config.profile
    if profile_key not in config.profiles:
        parser.error(f"unknown profile {profile_key!r}; choose from {', '.join(config.profiles)}")
    profile = config.profiles[profile_key]

    try:
        view = page.build_view(
            profile,
            config,
            period=args.period or profile.periods[0],
            unit=args.unit,
            currency=args.currency or profile.default_currency,
        )
    except ValueError as exc:
        parser.error(str(exc))

    print(json.dumps(view, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
