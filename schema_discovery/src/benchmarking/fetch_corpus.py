#!/usr/bin/env python3
"""
Fetch diverse real-world JSON documents for benchmarking schema discovery.
Goal: Download 100 documents (the schemas listed in the SchemaStore catalog)
with maximum structural diversity.
"""

import json
import sys
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

import requests

sys.path.insert(0, str(Path(__file__).parent.parent / "lib"))

from discover_schema import Schema, SchemaKind, discover_schema


CATALOG_URL = "https://www.schemastore.org/api/json/catalog.json"
CORPUS_DIR = Path(__file__).parent / "corpus"
CATEGORIES = ["small+simple", "small+complex", "big+simple", "big+complex"]

SIZE_THRESHOLD = 10000  # bytes
COMPLEXITY_THRESHOLD = 20  # combined metric
SCAN_LIMIT = 300
REQUEST_TIMEOUT = 10  # seconds


def fetch_catalog() -> List[Dict[str, Any]]:
    """Fetch the SchemaStore catalog."""
    print(f"Fetching catalog from {CATALOG_URL}...")
    response = requests.get(CATALOG_URL, timeout=REQUEST_TIMEOUT)
    response.raise_for_status()
    catalog = response.json()
    return catalog.get("schemas", [])


def download_document(url: str) -> Optional[Any]:
    """Download a single JSON document from URL; None if it cannot be fetched."""
    try:
        response = requests.get(url, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
        return response.json()
    except (requests.RequestException, ValueError) as e:
        print(f"  Error downloading {url}: {e}")
        return None


def estimate_complexity(document: Any) -> Dict[str, int]:
    """
    Estimate document complexity along multiple dimensions, measured on its
    discovered schema.
    Returns: {size, depth, property_count, array_count, object_count, distinct_shapes}
    """
    schema = discover_schema(document)
    shapes = set()

    def walk(node: Schema, current_depth: int):
        """Returns (depth, properties, arrays, objects) below node."""
        shapes.add(node)
        if node.kind is SchemaKind.ARRAY:
            children = list(node.items)
            totals = [current_depth + 1, 0, 1, 0]
        elif node.kind is SchemaKind.OBJECT:
            children = [child for schemas in node.properties.values() for child in schemas]
            totals = [current_depth + 1, len(node.properties), 0, 1]
        else:
            return (current_depth, 0, 0, 0)

        for child in children:
            depth, props, arrays, objects = walk(child, current_depth + 1)
            totals[0] = max(totals[0], depth)
            totals[1] += props
            totals[2] += arrays
            totals[3] += objects
        return tuple(totals)

    depth, props, arrays, objects = walk(schema, 0)

    return {
        "size": len(json.dumps(document)),
        "depth": depth,
        "property_count": props,
        "array_count": arrays,
        "object_count": objects,
        "distinct_shapes": len(shapes),
    }


def categorize_document(complexity: Dict[str, int]) -> str:
    """
    Categorize document into one of four quadrants:
    - small+simple
    - small+complex
    - big+simple
    - big+complex
    """
    is_big = complexity["size"] > SIZE_THRESHOLD
    complexity_score = (
        complexity["depth"] * 2 +
        complexity["property_count"] +
        complexity["array_count"] * 2 +
        complexity["object_count"]
    )
    is_complex = complexity_score > COMPLEXITY_THRESHOLD

    if is_big and is_complex:
        return "big+complex"
    elif is_big and not is_complex:
        return "big+simple"
    elif not is_big and is_complex:
        return "small+complex"
    else:
        return "small+simple"


def select_diverse_documents(catalog: List[Dict], target_count: int = 100,
                             delay: float = 0.1) -> List[Dict]:
    """
    Select diverse documents to maximize coverage across complexity dimensions.
    Target: an even share from each quadrant.
    """
    analyzed = []

    print(f"\nAnalyzing {len(catalog)} documents from catalog...")
    for idx, entry in enumerate(catalog[:SCAN_LIMIT]):
        url = entry.get("url")
        if not url:
            continue

        print(f"  [{idx+1}] {entry.get('name', 'unknown')}")
        document = download_document(url)
        if document is None:
            continue

        complexity = estimate_complexity(document)
        analyzed.append({
            "name": entry.get("name", "unknown"),
            "url": url,
            "document": document,
            "complexity": complexity,
            "category": categorize_document(complexity),
        })

        # Rate limiting
        if delay:
            time.sleep(delay)

    categories = {cat: [] for cat in CATEGORIES}
    for item in analyzed:
        categories[item["category"]].append(item)

    print("\n=== Document Distribution ===")
    for cat, items in categories.items():
        print(f"{cat}: {len(items)} documents")

    # Sample from each category
    per_category = target_count // len(CATEGORIES)
    selected = []
    for items in categories.values():
        selected.extend(items[:per_category])

    # If we're short, fill from the largest categories
    if len(selected) < target_count:
        remaining = target_count - len(selected)
        leftovers = [item for items in categories.values() for item in items[per_category:]]
        selected.extend(leftovers[:remaining])

    print(f"\n=== Selected {len(selected)} documents ===")
    return selected


def save_documents(documents: List[Dict], corpus_dir: Path = CORPUS_DIR):
    """Save documents to the corpus directory and record them in manifest.json."""
    corpus_dir.mkdir(parents=True, exist_ok=True)
    manifest_file = corpus_dir / "manifest.json"

    # Keep generated entries; replace previously downloaded ones
    manifest = []
    if manifest_file.exists():
        with open(manifest_file) as f:
            manifest = [entry for entry in json.load(f) if entry["category"] == "generated"]

    for item in documents:
        name = item["name"].replace("/", "_").replace(" ", "_")
        document_dir = corpus_dir / name
        document_dir.mkdir(exist_ok=True)

        document_file = document_dir / "document.json"
        with open(document_file, "w") as f:
            json.dump(item["document"], f, indent=2)

        manifest.append({
            "name": name,
            "category": item["category"],
            "complexity": item["complexity"],
            "url": item["url"],
            "document_file": str(document_file.relative_to(corpus_dir)),
        })

        print(f"  Saved: {name} ({item['category']})")

    with open(manifest_file, "w") as f:
        json.dump(manifest, f, indent=2)

    print(f"\nManifest saved to {manifest_file}")


def main():
    """Main execution."""
    catalog = fetch_catalog()
    print(f"Found {len(catalog)} documents in catalog")

    selected = select_diverse_documents(catalog, target_count=100)

    save_documents(selected)
    print("\n✓ Corpus collection complete!")


if __name__ == "__main__":
    main()
