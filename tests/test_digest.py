"""Tests for statement fingerprinting and digest summaries."""

import pytest

from mysql_slowlog.data.digest import QueryDigest, fingerprint, summarize


class TestFingerprint:
    def test_numbers_replaced(self):
        assert fingerprint("SELECT * FROM orders WHERE id = 42;") == "select * from orders where id = ?"

    def test_strings_replaced(self):
        fp = fingerprint("SELECT * FROM t WHERE name = 'O''Brien' AND city = \"Oslo\"")
        assert fp == "select * from t where name = ? and city = ?"

    def test_identifiers_with_digits_kept(self):
        assert fingerprint("SELECT c1 FROM t2") == "select c1 from t2"

    def test_in_list_collapsed(self):
        assert fingerprint("SELECT 1 FROM t WHERE id IN (1, 2, 3)") == fingerprint(
            "SELECT 1 FROM t WHERE id IN (7)"
        )

    def test_whitespace_collapsed(self):
        assert fingerprint("SELECT a\n  FROM   t") == "select a from t"


class TestSummarize:
    def test_groups_by_fingerprint(self, sample_events):
        digests = summarize(sample_events)
        assert len(digests) == 2
        top = digests[0]
        assert isinstance(top, QueryDigest)
        assert top.fingerprint == "select * from orders where id = ?"
        assert top.count == 2
        assert top.total_time == pytest.approx(4.0)
        assert top.mean_time == pytest.approx(2.0)
        assert top.max_time == pytest.approx(2.5)
        assert top.p95_time == pytest.approx(2.45)
        assert top.rows_examined == 1800
        assert top.example == "SELECT * FROM orders WHERE id = 42;"

    def test_ordered_by_total_time(self, sample_events):
        digests = summarize(sample_events)
        totals = [d.total_time for d in digests]
        assert totals == sorted(totals, reverse=True)

    def test_top(self, sample_events):
        assert len(summarize(sample_events, top=1)) == 1

    def test_missing_query_time(self):
        digests = summarize([{"Statement": "SELECT 1"}, {"Statement": "SELECT 2"}])
        assert len(digests) == 1
        assert digests[0].count == 2
        assert digests[0].total_time == 0.0
        assert digests[0].rows_examined == 0

    def test_empty_statements_skipped(self):
        assert summarize([{"Statement": ""}, {"Query_time": 1.0, "Statement": ""}]) == []

    def test_no_events(self):
        assert summarize([]) == []
