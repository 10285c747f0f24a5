#!/usr/bin/env python
"""Seed a development Weaviate instance with sample collections.

Run against an empty Weaviate (WEAVIATE_URL must be set):
    python scripts/seed_dev.py

Creates:
- Copertine: newspaper front pages with AI-generated captions
- Article: a handful of short articles
"""

import asyncio
import random
import sys
from datetime import UTC, datetime, timedelta
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.core.weaviate import WeaviateClient, WeaviateError, get_weaviate_client

TESTATE = ["Corriere della Sera", "La Repubblica", "La Stampa", "Il Sole 24 Ore"]
MODELS = ["gpt-4o", "claude-3-5-sonnet", "llama-3-70b"]

COPERTINE_CLASS = {
    "class": "Copertine",
    "description": "Newspaper front pages with AI-generated captions",
    "vectorizer": "none",
    "properties": [
        {"name": "testataName", "dataType": ["text"]},
        {"name": "editionId", "dataType": ["text"]},
        {"name": "editionDateIsoStr", "dataType": ["text"]},
        {"name": "captionStr", "dataType": ["text"]},
        {"name": "kickerStr", "dataType": ["text"]},
        {"name": "captionAIStr", "dataType": ["text"]},
        {"name": "imageAIDeStr", "dataType": ["text"]},
        {"name": "modelAIName", "dataType": ["text"]},
    ],
}

ARTICLE_CLASS = {
    "class": "Article",
    "description": "Short sample articles",
    "vectorizer": "none",
    "properties": [
        {"name": "title", "dataType": ["text"]},
        {"name": "body", "dataType": ["text"]},
        {"name": "wordCount", "dataType": ["int"]},
    ],
}


async def _existing_classes(client: WeaviateClient) -> set[str]:
    return {c["class"] for c in await client.fetch_schema()}


async def seed_copertine(client: WeaviateClient, days: int = 7) -> int:
    """Create the Copertine class with one edition per newspaper per day."""
    await client.create_class(COPERTINE_CLASS)
    today = datetime.now(UTC).date()
    created = 0
    for offset in range(days):
        day = today - timedelta(days=offset)
        for testata in TESTATE:
            await client.create_object(
                "Copertine",
                {
                    "testataName": testata,
                    "editionId": f"{testata[:3].upper()}-{day:%Y%m%d}",
                    "editionDateIsoStr": day.isoformat(),
                    "captionStr": f"Prima pagina del {day:%d/%m/%Y}",
                    "kickerStr": random.choice(["Politica", "Economia", "Esteri", "Sport"]),
                    "captionAIStr": f"Front page of {testata} for {day:%B %d}",
                    "imageAIDeStr": "A newspaper front page with a large headline photo",
                    "modelAIName": random.choice(MODELS),
                },
            )
            created += 1
    return created


async def seed_articles(client: WeaviateClient) -> int:
    """Create the Article class with a few objects."""
    await client.create_class(ARTICLE_CLASS)
    titles = ["Vector search basics", "Schema design", "Aggregations", "Cross-references"]
    for title in titles:
        body = f"Notes on {title.lower()}."
        await client.create_object(
            "Article", {"title": title, "body": body, "wordCount": len(body.split())}
        )
    return len(titles)


async def main() -> None:
    client = get_weaviate_client()
    try:
        existing = await _existing_classes(client)
        if "Copertine" in existing:
            print("Copertine already exists, skipping")
        else:
            print(f"Created {await seed_copertine(client)} Copertine objects")
        if "Article" in existing:
            print("Article already exists, skipping")
        else:
            print(f"Created {await seed_articles(client)} Article objects")
    except WeaviateError as exc:
        print(f"Seeding failed: {exc}")
        raise SystemExit(1) from exc
    finally:
        await client.close()

    print("\nDev seed complete.")


if __name__ == "__main__":
    asyncio.run(main())
