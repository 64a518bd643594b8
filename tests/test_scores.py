"""
Tests for reading score tables and scoring positions.
"""

import io

import pytest

import airdrop
import scores

from conftest import ADDR_A, ADDR_B, ADDR_C


class TestScoreForValue:
  """Tests for the position value tiers."""

  @pytest.mark.parametrize ("value, expected", [
    (5000000, (12, "whale")),
    (1000000, (12, "whale")),
    (999999.99, (6, "large")),
    (100000, (6, "large")),
    (1000, (3, "medium")),
    (150, (2, "small")),
    (20, (1, "tiny")),
    (19.99, (0, "none")),
    (0, (0, "none")),
  ])
  def test_tiers (self, value, expected):
    assert scores.scoreForValue (value) == expected


class TestProcessPositions:
  """Tests for scoring position snapshots."""

  def test_filter_dedupe_sort (self):
    """Small positions are dropped and the best position per address wins."""
    rows = [
      {"address": ADDR_A, "totalValue": "150"},
      {"address": ADDR_B, "totalValue": "20"},
      {"address": "0x" + ADDR_A[2:].upper (), "totalValue": "2000000"},
      {"address": ADDR_C, "totalValue": "1500"},
      {"address": ADDR_A, "totalValue": "50"},
      {"address": "", "totalValue": "500"},
      {"address": ADDR_B, "totalValue": "bad"},
    ]
    result, stats = scores.processPositions (rows)

    assert [r["address"] for r in result] == [ADDR_A, ADDR_C]
    assert result[0]["score"] == 12
    assert result[0]["user_label"] == "whale"
    assert result[1]["score"] == 3
    assert stats == {
      "whale": 1,
      "large": 0,
      "medium": 1,
      "small": 0,
      "tiny": 0,
    }

  def test_write_scores (self):
    result, _ = scores.processPositions ([
      {"address": ADDR_A, "totalValue": "150", "extra": "x"},
    ])
    out = io.StringIO ()
    scores.writeScores (out, result, ["address", "score"])
    assert out.getvalue ().splitlines () == [
      "address,score",
      "%s,2" % ADDR_A,
    ]


class TestMergeScores:

  def test_merge (self):
    """Bonus scores are added by case-insensitive address."""
    rows = [
      {"address": ADDR_A, "total_score": "2"},
      {"address": ADDR_B, "total_score": "1"},
      {"address": ADDR_C},
    ]
    bonus = {
      "0x" + ADDR_A[2:].upper (): 3,
      ADDR_C: 1.5,
    }
    merged = scores.mergeScores (rows, bonus)

    assert merged[0]["total_score"] == 5
    assert merged[1]["total_score"] == "1"
    assert merged[2]["total_score"] == 1.5
    assert rows[0]["total_score"] == "2"


class TestReadScoreRows:
  """Tests for reading (address, score) rows."""

  def test_named_columns (self):
    inp = io.StringIO ("score,address\n"
                       "3,%s\n"
                       "\n"
                       "1.5,%s\n" % (ADDR_A, ADDR_B))
    assert list (scores.readScoreRows (inp)) == [
      (ADDR_A, "3"),
      (ADDR_B, "1.5"),
    ]

  def test_total_score_preferred (self):
    inp = io.StringIO ("address,score,total_score\n%s,1,4\n" % ADDR_A)
    assert list (scores.readScoreRows (inp)) == [(ADDR_A, "4")]

  def test_tab_separated_positional (self):
    """Without known headers, the second and ninth column are used."""
    cols = ["c%d" % i for i in range (9)]
    row = ["x", ADDR_C, "", "", "", "", "", "", " 7 "]
    inp = io.StringIO ("\t".join (cols) + "\n"
                       + "\t".join (row) + "\n"
                       + "x\t%s\n" % ADDR_A)
    assert list (scores.readScoreRows (inp)) == [
      (ADDR_C, "7"),
      (None, None),
    ]

  def test_empty (self):
    assert list (scores.readScoreRows (io.StringIO (""))) == []

  def test_feeds_partition (self):
    """Read rows can be partitioned directly; bad rows are skipped."""
    inp = io.StringIO ("address,score\n"
                       "%s,1\n"
                       "0xnope,1\n"
                       "%s,2\n" % (ADDR_A, ADDR_B))
    data = airdrop.partition (scores.readScoreRows (inp), batchSize=10)
    assert data.recordCount == 2
    assert data.skipped["address"] == 1

  def test_byte_order_mark (self):
    """A leading byte order mark does not hide the header names."""
    inp = io.StringIO ("\ufeffaddress,totalValue,score\n"
                       "%s,50,1\n" % ADDR_A)
    assert list (scores.readScoreRows (inp)) == [(ADDR_A, "1")]
