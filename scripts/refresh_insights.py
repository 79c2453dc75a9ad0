#!/usr/bin/env python3
"""
Industry Insight Refresh Script

Runs the weekly insight refresh immediately, outside the scheduler.

Usage:
    python scripts/refresh_insights.py
    python scripts/refresh_insights.py --dry-run          # list due records only
    python scripts/refresh_insights.py --batch-size 50 --concurrency 4
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import argparse
import json
from datetime import datetime

from career_insights.config import get_settings
from career_insights.models.base import SessionLocal, init_db
from career_insights.models.industry_insight import IndustryInsight
from career_insights.services.insight_generator import InsightGenerator
from career_insights.services.insight_refresh_service import InsightRefreshService
from career_insights.utils.logger import log


def list_due(db, now, limit=0):
    """Records the next run would pick up, in the same order and cap."""
    query = (
        db.query(IndustryInsight.id, IndustryInsight.industry, IndustryInsight.next_update)
        .filter(IndustryInsight.next_update <= now)
    )
    if limit:
        query = query.limit(limit)
    rows = query.all()
    return [
        {"id": r.id, "industry": r.industry, "next_update": r.next_update.isoformat()}
        for r in rows
    ]


def main():
    parser = argparse.ArgumentParser(description="Refresh outdated industry insights")
    parser.add_argument("--dry-run", action="store_true", help="Only list records that are due")
    parser.add_argument("--batch-size", type=int, default=None, help="Max records this run (0 = all)")
    parser.add_argument("--concurrency", type=int, default=None, help="Parallel model calls")
    args = parser.parse_args()

    init_db()
    db = SessionLocal()
    try:
        if args.dry_run:
            batch_size = get_settings().insight_refresh_batch_size if args.batch_size is None else args.batch_size
            due = list_due(db, datetime.utcnow(), limit=batch_size)
            print(json.dumps({"due": len(due), "records": due}, indent=2))
            return

        generator = InsightGenerator.from_settings()
        if not generator.is_available():
            log.error("ANTHROPIC_API_KEY is not configured; nothing to do")
            sys.exit(1)

        try:
            result = InsightRefreshService(
                db,
                generator,
                batch_size=args.batch_size,
                concurrency=args.concurrency,
            ).refresh_outdated()
        finally:
            generator.close()

        print(json.dumps(result, indent=2))
    finally:
        db.close()


if __name__ == "__main__":
    main()
