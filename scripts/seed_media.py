# scripts/seed_media.py
"""Load content records from a JSON file.

Usage: python scripts/seed_media.py data/media.json

The file maps category names to lists of records, e.g.
``{"sad": [{"id": 1, "url": "https://..."}], "fact": [{"id": 1, "fact": "..."}]}``.
Records whose id already exists are skipped.
"""
import json
import sys

from sqlalchemy import select

from waifu_api.categories import get_category
from waifu_api.db import SessionLocal, engine
from waifu_api.models import Base, content_tables

Base.metadata.create_all(bind=engine)

path = sys.argv[1] if len(sys.argv) > 1 else "data/media.json"
with open(path, encoding="utf-8") as f:
    payload = json.load(f)

db = SessionLocal()
for name, records in payload.items():
    category = get_category(name)
    if category is None:
        print(f"Skipping unknown category: {name}")
        continue
    table = content_tables[category.name]
    existing = set(db.scalars(select(table.c.id)))
    rows = [
        {"id": int(r["id"]), **{field: r.get(field) for field in category.fields}}
        for r in records
        if int(r["id"]) not in existing
    ]
    if rows:
        db.execute(table.insert(), rows)
    print(f"{category.name}: inserted {len(rows)}, skipped {len(records) - len(rows)}")
db.commit()
db.close()
