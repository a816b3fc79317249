#!/usr/bin/env python
from __future__ import annotations

import argparse
import sys
from datetime import date, timedelta
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from backend.application import SiteService
from backend.core.store import JsonFileStore


def main() -> None:
    parser = argparse.ArgumentParser(description="Write a sample site data root")
    parser.add_argument("--output", required=True, help="Directory that will hold the JSON collections")
    parser.add_argument("--project", default="Site X", help="Name of the sample project")
    parser.add_argument("--sq-ft", type=int, default=600, help="Project footprint in square feet")
    parser.add_argument("--days", type=int, default=2, help="Days until the project deadline")
    args = parser.parse_args()

    output = Path(args.output)
    output.mkdir(parents=True, exist_ok=True)

    service = SiteService(JsonFileStore(output))
    project = service.add_project(args.project, date.today() + timedelta(days=args.days), args.sq_ft)
    service.add_worker("Ravi Kumar", "Mason", project.name)
    service.add_worker("Anita Shah", "Electrician")
    service.adjust_progress(project.id, 20)

    print(f"sample site data written: {output}")


if __name__ == "__main__":
    main()
