from datetime import timedelta

from autobackup.classifier import AgeClassifier, CutoffPolicy
from autobackup.models import Age

from conftest import NOW


def test_cutoff_is_now_minus_days():
    assert CutoffPolicy(3, NOW).cutoff == NOW - timedelta(days=3)
    assert CutoffPolicy(0, NOW).cutoff == NOW


def test_boundary_is_recent():
    cutoff = NOW - timedelta(days=3)
    assert AgeClassifier.classify(cutoff, cutoff) is Age.RECENT


def test_before_cutoff_is_old_after_is_recent():
    cutoff = NOW - timedelta(days=3)
    assert AgeClassifier.classify(cutoff - timedelta(microseconds=1), cutoff) is Age.OLD
    assert AgeClassifier.classify(cutoff + timedelta(seconds=1), cutoff) is Age.RECENT


def test_zero_days_only_now_or_later_is_recent():
    policy = CutoffPolicy(0, NOW)
    assert AgeClassifier.classify(NOW, policy.cutoff) is Age.RECENT
    assert AgeClassifier.classify(NOW - timedelta(seconds=1), policy.cutoff) is Age.OLD
