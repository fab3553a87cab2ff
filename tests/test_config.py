from drug_insight import config


def test_bool_parsing(monkeypatch):
    monkeypatch.setenv("DRUG_INSIGHT_FLAG", "Yes")
    assert config._get_bool("DRUG_INSIGHT_FLAG") is True

    monkeypatch.setenv("DRUG_INSIGHT_FLAG", "off")
    assert config._get_bool("DRUG_INSIGHT_FLAG") is False

    monkeypatch.delenv("DRUG_INSIGHT_FLAG")
    assert config._get_bool("DRUG_INSIGHT_FLAG", default=True) is True


def test_numeric_parsing_falls_back_on_bad_values(monkeypatch):
    monkeypatch.setenv("DRUG_INSIGHT_NUMBER", "not-a-number")

    assert config._get_float("DRUG_INSIGHT_NUMBER", 0.8) == 0.8
    assert config._get_int("DRUG_INSIGHT_NUMBER", 5) == 5

    monkeypatch.setenv("DRUG_INSIGHT_NUMBER", "12")
    assert config._get_int("DRUG_INSIGHT_NUMBER", 5) == 12
