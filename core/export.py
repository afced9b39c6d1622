import json
import logging
import os
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from core.models import Article

logger = logging.getLogger(__name__)

IST = timezone(timedelta(hours=5, minutes=30))


def ist_time(now: datetime) -> str:
    return now.astimezone(IST).strftime("%d/%m/%Y, %I:%M:%S %p")


def write_file(path: Path, data: Dict[str, Any]) -> None:
    """Write JSON next to the target and rename over it, so readers never see a half-written file."""
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        os.replace(tmp_path, path)
    except BaseException:
        os.unlink(tmp_path)
        raise


def write_json_snapshot(
    export_dir: str,
    articles: List[Article],
    views: Dict[str, List[Article]],
    meta: Dict[str, Any],
    max_export: int = 100,
    now: Optional[datetime] = None,
) -> List[str]:
    """
    Write news.json, one <category>.json per view and meta.json for static
    hosting. `articles` must already be newest first. Returns the file names.
    """
    now = now or datetime.now(timezone.utc)
    out = Path(export_dir)
    out.mkdir(parents=True, exist_ok=True)
    stamp = {"updated_at": now.isoformat(), "updated_at_IST": ist_time(now)}

    latest = articles[:max_export]
    write_file(out / "news.json", {**stamp, "count": len(latest), "articles": [a.to_dict() for a in latest]})

    files = ["news.json"]
    for category, items in views.items():
        name = f"{category}.json"
        write_file(out / name, {
            **stamp,
            "category": category,
            "count": len(items),
            "articles": [a.to_dict() for a in items],
        })
        files.append(name)

    write_file(out / "meta.json", {**meta, "last_updated_IST": ist_time(now), "data_files": list(files)})
    files.append("meta.json")

    logger.info(f"Wrote {len(files)} JSON files to {out}")
    return files
