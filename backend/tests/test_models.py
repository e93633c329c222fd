"""
Unit tests for the persisted record models.
"""

import pytest
from pydantic import ValidationError

from cardiolog.config import Settings
from cardiolog.models import AppData, ChartPoint, HeartRateRecord, UserProfile


def test_record_is_immutable(record_factory):
    record = record_factory()
    with pytest.raises(ValidationError):
        record.min_hr = 10


def test_record_accepts_names_and_aliases():
    by_alias = HeartRateRecord.model_validate({
        "date": "Today", "fullDate": "Sat 31 Jan 07:10", "minHr": 55, "maxHr": 55,
    })
    by_name = HeartRateRecord(display_date="Today", full_date_text="Sat 31 Jan 07:10", min_hr=55, max_hr=55)
    assert by_alias == by_name
    assert by_alias.avg_hr is None
    assert by_alias.effective_avg == 55


def test_models_use_dict_config():
    assert HeartRateRecord.model_config["frozen"] is True
    for model in (HeartRateRecord, UserProfile, AppData, ChartPoint):
        assert model.model_config["populate_by_name"] is True
    assert Settings.model_config["env_file"] == ".env"


def test_chart_point_serializes_empty_flag_by_alias():
    point = ChartPoint(id="0", label="00:00", date="2026-01-31 00:00", is_empty=True)
    assert point.model_dump(by_alias=True)["isEmpty"] is True


def test_app_data_round_trip_keeps_missing_average(record_factory):
    data = AppData(profile=UserProfile(name="Alex"), records=[record_factory(avg_hr=None)])
    assert AppData.from_json(data.to_json()) == data
