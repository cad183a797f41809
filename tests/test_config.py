import pytest
from pydantic import ValidationError

from app.core.config import Settings


@pytest.mark.parametrize("missing", ["SECRET_KEY", "DATABASE_URL"])
def test_settings_refuse_to_load_without_required_values(monkeypatch, missing):
    monkeypatch.delenv(missing, raising=False)
    with pytest.raises(ValidationError) as excinfo:
        Settings(_env_file=None)
    assert missing in str(excinfo.value)


def test_settings_defaults(monkeypatch):
    monkeypatch.setenv("ALLOWED_ORIGINS", "http://localhost:5173, https://stillwater.io ,")
    s = Settings(_env_file=None)
    assert s.ALGORITHM == "HS256"
    assert s.ACCESS_TOKEN_EXPIRE_MINUTES == 7 * 24 * 60
    assert s.origins_list == ["http://localhost:5173", "https://stillwater.io"]
