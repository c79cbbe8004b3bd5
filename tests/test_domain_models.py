"""
Tests for domain models.
"""

import pendulum
import pytest

from doctorslots.domain.models import Location, TimeRange


class TestTimeRange:
    """Tests for TimeRange model."""

    def test_create_valid_time_range(self):
        """Test creating a valid time range."""
        start = pendulum.parse("2024-09-10 09:00", tz="UTC")
        end = pendulum.parse("2024-09-10 17:00", tz="UTC")

        tr = TimeRange(start=start, end=end)

        assert tr.start == start
        assert tr.end == end

    def test_invalid_time_range_raises_error(self):
        """Test that creating an invalid time range raises ValueError."""
        start = pendulum.parse("2024-09-10 17:00", tz="UTC")
        end = pendulum.parse("2024-09-10 09:00", tz="UTC")

        with pytest.raises(ValueError, match="Start time .* must be before end time"):
            TimeRange(start=start, end=end)

    def test_touches(self):
        """Overlapping ranges and ranges sharing an endpoint touch."""
        morning = TimeRange(
            start=pendulum.parse("2024-09-10 09:00", tz="UTC"),
            end=pendulum.parse("2024-09-10 11:00", tz="UTC")
        )
        late_morning = TimeRange(
            start=pendulum.parse("2024-09-10 10:00", tz="UTC"),
            end=pendulum.parse("2024-09-10 12:00", tz="UTC")
        )
        noon = TimeRange(
            start=pendulum.parse("2024-09-10 11:00", tz="UTC"),
            end=pendulum.parse("2024-09-10 13:00", tz="UTC")
        )
        evening = TimeRange(
            start=pendulum.parse("2024-09-10 18:00", tz="UTC"),
            end=pendulum.parse("2024-09-10 20:00", tz="UTC")
        )

        assert morning.touches(late_morning)
        assert late_morning.touches(morning)
        assert morning.touches(noon)
        assert noon.touches(morning)
        assert not morning.touches(evening)


class TestLocation:
    """Tests for Location model."""

    def test_display_address_with_all_parts(self):
        location = Location(
            id="1", name="Square Hospital", address="18/F West Panthapath",
            city="Dhaka", state="Dhaka", zip="1205"
        )

        assert location.display_address() == "18/F West Panthapath, Dhaka, Dhaka 1205"

    def test_display_address_without_state_and_zip(self):
        location = Location(id="2", name="Clinic", address="Road 2", city="Sylhet")

        assert location.display_address() == "Road 2, Sylhet"
