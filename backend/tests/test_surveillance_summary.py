"""Tests for the per-station surveillance summary."""
import pytest

from app.models.base import RadarStatusEnum, ThreatLevelEnum
from app.modules.surveillance_summary import surveillance_summary

from tests.factories import make_station, make_threat


class TestSurveillanceSummary:
    def test_station_without_detections(self, db):
        make_station(db, "Quiet Hill", RadarStatusEnum.OFFLINE)
        db.commit()

        rows = surveillance_summary(db)

        assert rows == [{
            "station_name": "Quiet Hill",
            "operational_status": "Offline",
            "detected_aircraft_count": 0,
            "high_threat_count": 0,
            "max_altitude_ft": None,
            "min_altitude_ft": None,
            "avg_speed_kts": 0.0,
        }]

    def test_aggregates_per_station(self, db):
        north = make_station(db, "North Ridge")
        coast = make_station(db, "Coastal Array")
        make_threat(db, north, "N-1", ThreatLevelEnum.HIGH, altitude_ft=30000.0, speed_kts=600.0)
        make_threat(db, north, "N-2", ThreatLevelEnum.CRITICAL, altitude_ft=1000.0, speed_kts=1200.0)
        make_threat(db, north, "N-3", ThreatLevelEnum.LOW, altitude_ft=5000.0, speed_kts=101.0)
        make_threat(db, coast, "C-1", ThreatLevelEnum.MODERATE, altitude_ft=400.0, speed_kts=300.0)
        db.commit()

        rows = {r["station_name"]: r for r in surveillance_summary(db)}

        assert rows["North Ridge"]["detected_aircraft_count"] == 3
        assert rows["North Ridge"]["high_threat_count"] == 2
        assert rows["North Ridge"]["max_altitude_ft"] == 30000.0
        assert rows["North Ridge"]["min_altitude_ft"] == 1000.0
        assert rows["North Ridge"]["avg_speed_kts"] == pytest.approx(1901.0 / 3)
        assert rows["Coastal Array"]["detected_aircraft_count"] == 1
        assert rows["Coastal Array"]["high_threat_count"] == 0

    def test_average_speed_not_rounded(self, db):
        station = make_station(db)
        make_threat(db, station, "S-1", speed_kts=100.004)
        make_threat(db, station, "S-2", speed_kts=100.0)
        db.commit()

        avg = surveillance_summary(db)[0]["avg_speed_kts"]
        assert avg == pytest.approx(100.002)
        assert avg != round(avg, 2)

    def test_ordered_by_station_name(self, db):
        make_station(db, "Zulu")
        make_station(db, "Alpha")
        db.commit()
        assert [r["station_name"] for r in surveillance_summary(db)] == ["Alpha", "Zulu"]

    def test_endpoint(self, client, scenario):
        rows = client.get("/api/surveillance/summary").json()
        assert len(rows) == 1
        assert rows[0]["detected_aircraft_count"] == 1
        assert rows[0]["high_threat_count"] == 1
