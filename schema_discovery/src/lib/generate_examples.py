#!/usr/bin/env python3
"""
Generate synthetic JSON documents with controllable shape diversity.
Goal: reproducible corpora that exercise every JSON kind, repeated array
item shapes and deep nesting.
"""

import json
import random
import string
import uuid
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Dict, List


CORPUS_DIR = Path(__file__).parent.parent / "benchmarking" / "corpus"
DEFAULT_COUNT = 100

FIELD_NAMES = [
    'id', 'name', 'email', 'created_at', 'tags', 'items', 'owner', 'status',
    'score', 'active', 'url', 'metadata', 'children', 'location', 'notes',
]


class DocumentGenerator:
    """Generate diverse random JSON documents."""

    def __init__(self, seed: int = 42, max_depth: int = 4, max_width: int = 6):
        """Initialize with random seed for reproducibility."""
        if max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        self.seed = seed
        self.max_depth = max_depth
        self.max_width = max_width
        self.rng = random.Random(seed)

    def generate_documents(self, count: int = DEFAULT_COUNT) -> List[Dict[str, Any]]:
        """Generate multiple diverse documents."""
        documents = []
        for i in range(count):
            # Each document has its own seed so any one of them can be reproduced
            self.rng.seed(self.seed + i)
            documents.append(self.generate_document())
        return documents

    def generate_document(self) -> Dict[str, Any]:
        """Generate a single document with an object at the root."""
        return self._generate_object(level=0)

    def generate_wide_array(self, width: int, shapes: int) -> List[Dict[str, Any]]:
        """
        Generate an array of records cycling through a fixed set of shapes.

        Record k carries an "id" plus k extra fields, so exactly
        min(width, shapes) distinct item shapes appear.
        """
        if shapes < 1:
            raise ValueError("shapes must be at least 1")
        return [self._generate_record(i % shapes) for i in range(width)]

    def generate_nested(self, depth: int) -> Any:
        """Generate a value nested depth containers deep, alternating arrays and objects."""
        value: Any = self._generate_random_string(5, 10)
        for level in range(depth):
            if level % 2 == 0:
                value = [value]
            else:
                value = {"child": value}
        return value

    def _generate_value(self, level: int) -> Any:
        """Generate any JSON value; containers only while below max_depth."""
        if level >= self.max_depth:
            return self._generate_scalar()

        choice = self.rng.random()
        if choice < 0.6:
            return self._generate_scalar()
        elif choice < 0.8:
            return self._generate_array(level)
        else:
            return self._generate_object(level)

    def _generate_object(self, level: int) -> Dict[str, Any]:
        """Generate an object with a random selection of fields."""
        obj = {}
        width = self.rng.randint(0, self.max_width)
        for key in self.rng.sample(FIELD_NAMES, min(width, len(FIELD_NAMES))):
            obj[key] = self._generate_value(level + 1)
        return obj

    def _generate_array(self, level: int) -> List[Any]:
        """Generate an array, either uniform or mixed."""
        length = self.rng.randint(0, self.max_width)

        if level + 1 < self.max_depth and self.rng.random() < 0.5:
            # Uniform records: one set of keys, some optional (60% chance each)
            keys = self.rng.sample(FIELD_NAMES, self.rng.randint(1, 4))
            records = []
            for _ in range(length):
                record = {}
                for idx, key in enumerate(keys):
                    if idx == 0 or self.rng.random() < 0.6:
                        record[key] = self._generate_value(level + 2)
                records.append(record)
            return records

        return [self._generate_value(level + 1) for _ in range(length)]

    def _generate_record(self, shape: int) -> Dict[str, Any]:
        """Generate a record of the given shape number."""
        record: Dict[str, Any] = {"id": self.rng.randint(1, 100000)}
        for j in range(shape):
            if j % 2 == 0:
                record[f"field_{j}"] = self._generate_random_string(3, 12)
            else:
                record[f"field_{j}"] = round(self.rng.uniform(0, 1000), 2)
        return record

    def _generate_scalar(self) -> Any:
        """Generate a random value of any primitive type."""
        types = [
            lambda: None,
            lambda: self.rng.choice([True, False]),
            lambda: self.rng.randint(-1000, 1000),
            lambda: round(self.rng.uniform(-1000, 1000), 2),
            self._generate_string,
        ]
        return self.rng.choice(types)()

    def _generate_string(self) -> str:
        """Generate a string, sometimes in a well-known format."""
        choice = self.rng.random()
        if choice < 0.1:
            return self._generate_datetime()
        elif choice < 0.2:
            return self._generate_email()
        elif choice < 0.3:
            return self._generate_uri()
        elif choice < 0.4:
            return str(uuid.UUID(int=self.rng.getrandbits(128), version=4))
        else:
            return self._generate_random_string(1, 30)

    def _generate_random_string(self, min_len: int, max_len: int) -> str:
        """Generate a random string."""
        length = self.rng.randint(min_len, min(max_len, min_len + 20))

        # Vary string type
        choice = self.rng.random()
        if choice < 0.3:
            # Words
            words = ['lorem', 'ipsum', 'dolor', 'sit', 'amet', 'consectetur', 'adipiscing']
            return ' '.join(self.rng.choices(words, k=min(5, length // 5 + 1)))[:length]
        elif choice < 0.6:
            # Alphanumeric
            return ''.join(self.rng.choices(string.ascii_letters + string.digits, k=length))
        else:
            # Letters only
            return ''.join(self.rng.choices(string.ascii_lowercase, k=length))

    def _generate_datetime(self) -> str:
        """Generate an ISO datetime string."""
        base = datetime(2020, 1, 1)
        random_dt = base + timedelta(days=self.rng.randint(0, 1825), hours=self.rng.randint(0, 23))
        return random_dt.isoformat() + "Z"

    def _generate_email(self) -> str:
        """Generate a random email."""
        names = ['alice', 'bob', 'charlie', 'diana', 'eve', 'frank']
        domains = ['example.com', 'test.org', 'demo.net', 'sample.io']
        return f"{self.rng.choice(names)}{self.rng.randint(1, 999)}@{self.rng.choice(domains)}"

    def _generate_uri(self) -> str:
        """Generate a random URI."""
        schemes = ['http', 'https', 'ftp']
        domains = ['example.com', 'test.org', 'demo.net']
        paths = ['api', 'v1', 'data', 'resource']
        return f"{self.rng.choice(schemes)}://{self.rng.choice(domains)}/{'/'.join(self.rng.sample(paths, 2))}"


def main():
    """Write a generated corpus next to the downloaded one."""
    output_dir = CORPUS_DIR / "generated"
    output_dir.mkdir(parents=True, exist_ok=True)
    manifest_file = CORPUS_DIR / "manifest.json"

    manifest = []
    if manifest_file.exists():
        with open(manifest_file) as f:
            manifest = [entry for entry in json.load(f) if entry["category"] != "generated"]

    generator = DocumentGenerator()
    documents = generator.generate_documents(DEFAULT_COUNT)

    print(f"Generating {len(documents)} documents...\n")

    for idx, document in enumerate(documents):
        name = f"generated_{idx:03d}"
        document_file = output_dir / f"{name}.json"
        with open(document_file, "w") as f:
            json.dump(document, f, indent=2)

        manifest.append({
            "name": name,
            "category": "generated",
            "document_file": str(document_file.relative_to(CORPUS_DIR)),
        })

    with open(manifest_file, "w") as f:
        json.dump(manifest, f, indent=2)

    print(f"✓ Generated {len(documents)} documents -> {output_dir}")


if __name__ == "__main__":
    main()
