#!/usr/bin/env python3
"""
Unit tests for seed dataset loading.
"""

import json
import os
import tempfile
import unittest

from core.app_context import PROJECT_ROOT
from core.seeds import (
    SeedDataError,
    load_seed_records,
    parse_seed_record,
    parse_seed_records,
)


class TestParseSeedRecord(unittest.TestCase):

    def test_full_record(self):
        seed = parse_seed_record({
            "company": " Acme ",
            "repo": "acme/x",
            "logo": "https://example.com/acme.png",
            "rating_count": "4.7",
            "projects_count": 1200,
            "website": "https://acme.dev",
        })
        self.assertEqual(seed.company, "Acme")
        self.assertEqual(seed.rating_count, 4.7)
        self.assertEqual(seed.projects_count, 1200)
        self.assertEqual(seed.website, "https://acme.dev")

    def test_optional_fields_absent(self):
        seed = parse_seed_record({"company": "Acme", "repo": "acme/x", "logo": ""})
        self.assertIsNone(seed.logo)
        self.assertIsNone(seed.rating_count)
        self.assertIsNone(seed.projects_count)

    def test_missing_required_fields(self):
        for raw in [{"repo": "a/b"}, {"company": "A"}, {"company": " ", "repo": "a/b"}, "Acme"]:
            with self.subTest(raw=raw):
                with self.assertRaises(SeedDataError):
                    parse_seed_record(raw)

    def test_non_numeric_rating(self):
        with self.assertRaises(SeedDataError):
            parse_seed_record({"company": "A", "repo": "a/b", "rating_count": "great"})

    def test_negative_counts_rejected(self):
        for raw in [
            {"company": "Acme", "repo": "acme/x", "projects_count": -5},
            {"company": "Acme", "repo": "acme/x", "rating_count": -1},
        ]:
            with self.subTest(raw=raw):
                with self.assertRaises(SeedDataError):
                    parse_seed_record(raw)

    def test_zero_project_count_accepted(self):
        seed = parse_seed_record({"company": "Acme", "repo": "acme/x", "projects_count": 0})
        self.assertEqual(seed.projects_count, 0)

    def test_top_level_must_be_array(self):
        with self.assertRaises(SeedDataError):
            parse_seed_records({"company": "A", "repo": "a/b"})


class TestLoadSeedRecords(unittest.TestCase):

    def test_round_trip_file_order(self):
        records = [
            {"company": "B", "repo": "b/b"},
            {"company": "A", "repo": "a/a", "rating_count": 4.9},
        ]
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "seeds.json")
            with open(path, "w") as f:
                json.dump(records, f)
            seeds = load_seed_records(path)

        self.assertEqual([s.company for s in seeds], ["B", "A"])

    def test_missing_file(self):
        with self.assertRaises(SeedDataError):
            load_seed_records("/nonexistent/seeds.json")

    def test_invalid_json(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "seeds.json")
            with open(path, "w") as f:
                f.write("[{")
            with self.assertRaises(SeedDataError):
                load_seed_records(path)

    def test_bundled_dataset_is_valid(self):
        seeds = load_seed_records(PROJECT_ROOT / "data" / "agencies.json")
        self.assertGreater(len(seeds), 0)
        self.assertEqual(len({s.repo for s in seeds}), len(seeds))


if __name__ == '__main__':
    unittest.main(verbosity=2)
