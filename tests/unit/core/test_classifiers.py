#!/usr/bin/env python3
"""
Unit tests for the domain and popularity classifiers.
"""

import unittest

from core.classifiers import (
    DOMAINS,
    DOMAIN_SERVICES,
    classify_domain,
    classify_popularity,
    services_for,
)
from core.models import Popularity

TIER_RANK = {
    Popularity.RISING: 0,
    Popularity.POPULAR: 1,
    Popularity.FAMOUS: 2,
    Popularity.LEGENDARY: 3,
}


class TestClassifyDomain(unittest.TestCase):

    def test_web_languages_any_case(self):
        for language in ["TypeScript", "typescript", "TYPESCRIPT", "JavaScript", "HTML", "css", "PHP", "Ruby"]:
            with self.subTest(language=language):
                self.assertEqual(classify_domain(language), "Web Development")

    def test_ml_languages(self):
        self.assertEqual(classify_domain("Python"), "AI/Machine Learning")
        self.assertEqual(classify_domain("R"), "AI/Machine Learning")

    def test_infra_languages(self):
        for language in ["Java", "Scala", "C++", "Go", "C#"]:
            with self.subTest(language=language):
                self.assertEqual(classify_domain(language), "DevOps & Cloud")

    def test_missing_language_is_unknown(self):
        self.assertEqual(classify_domain(None), "Unknown")
        self.assertEqual(classify_domain(""), "Unknown")

    def test_unrecognized_language_falls_back(self):
        self.assertEqual(classify_domain("COBOL"), "Data & Analytics")
        self.assertEqual(classify_domain("Rust"), "Data & Analytics")

    def test_substring_is_not_membership(self):
        """"Rust" contains "r" but is not in the ML set."""
        self.assertNotEqual(classify_domain("Rust"), "AI/Machine Learning")


class TestServicesFor(unittest.TestCase):

    def test_first_three_in_table_order(self):
        self.assertEqual(
            services_for("DevOps & Cloud"),
            ("Cloud Migration (AWS/Azure)", "Kubernetes Management", "CI/CD Automation")
        )

    def test_every_domain_has_at_most_three(self):
        for domain in list(DOMAIN_SERVICES) + ["Unknown", "Nonsense"]:
            with self.subTest(domain=domain):
                self.assertLessEqual(len(services_for(domain)), 3)

    def test_unknown_domain_uses_other(self):
        self.assertEqual(services_for("Unknown"), ("General Consulting", "Security Audits", "Compliance"))

    def test_deterministic(self):
        for domain in DOMAIN_SERVICES:
            self.assertEqual(services_for(domain), services_for(domain))

    def test_selectable_domains_exclude_other(self):
        self.assertEqual(len(DOMAINS), 7)
        self.assertNotIn("Other", DOMAINS)


class TestClassifyPopularity(unittest.TestCase):

    def test_boundaries(self):
        cases = [
            (4.8, Popularity.LEGENDARY),
            (4.79999, Popularity.FAMOUS),
            (4.5, Popularity.FAMOUS),
            (4.4999, Popularity.POPULAR),
            (4.0, Popularity.POPULAR),
            (3.999, Popularity.RISING),
            (5.0, Popularity.LEGENDARY),
            (0.0, Popularity.RISING),
        ]
        for rating, expected in cases:
            with self.subTest(rating=rating):
                self.assertEqual(classify_popularity(rating), expected)

    def test_monotonic(self):
        ratings = [i / 100 for i in range(0, 501)]
        ranks = [TIER_RANK[classify_popularity(r)] for r in ratings]
        self.assertEqual(ranks, sorted(ranks))

    def test_string_values(self):
        self.assertEqual(classify_popularity(4.9).value, "legendary")
        self.assertEqual(classify_popularity(4.9), "legendary")


if __name__ == '__main__':
    unittest.main(verbosity=2)
