"""
Unit tests for earnings_alpha.event_study.classification module.
"""
import pytest
from earnings_alpha.event_study import classification, BEAT, MEET, MISS


class TestSurprisePercentage:
    """Tests for EPS surprise calculation."""
    
    def test_positive_surprise(self):
        """Test estimate 1.00, actual 1.10 gives +10%."""
        assert classification.surprise_percentage(1.00, 1.10) == pytest.approx(10.0)
    
    def test_negative_estimate_uses_absolute_value(self):
        """Test that the denominator is |estimate|."""
        # -1.00 -> -0.50 is an improvement, so the surprise is positive
        assert classification.surprise_percentage(-1.00, -0.50) == pytest.approx(50.0)
        assert classification.surprise_percentage(-1.00, -1.50) == pytest.approx(-50.0)
    
    def test_zero_estimate(self):
        """Test that a zero estimate gives exactly 0."""
        assert classification.surprise_percentage(0.0, 3.0) == 0.0


class TestClassifySurprise:
    """Tests for Beat/Meet/Miss thresholds."""
    
    @pytest.mark.parametrize("pct,expected", [
        (5.0, MEET),
        (5.0001, BEAT),
        (-5.0, MEET),
        (-5.0001, MISS),
        (0.0, MEET),
        (100.0, BEAT),
        (-100.0, MISS),
    ])
    def test_boundaries(self, pct, expected):
        """Test strict thresholds, inclusive toward Meet."""
        assert classification.classify_surprise(pct) == expected
    
    def test_beat_scenario(self):
        """Test estimate 1.00, actual 1.10 is a Beat."""
        pct = classification.surprise_percentage(1.00, 1.10)
        
        assert classification.classify_surprise(pct) == BEAT
    
    def test_zero_estimate_is_meet(self):
        """Test the estimate-zero case defaults to Meet."""
        pct = classification.surprise_percentage(0.0, -2.0)
        
        assert classification.classify_surprise(pct) == MEET
