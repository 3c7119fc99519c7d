import pytest

from dialtone_audio import create_audio_backend
from dialtone_osc import OscSynthTrigger
from dialtone_settings import AppSettings


def test_osc_backend_from_settings():
    settings = AppSettings(backend="osc", osc_host="127.0.0.1", osc_port=57120, amp=0.3)
    with create_audio_backend(settings) as backend:
        assert isinstance(backend, OscSynthTrigger)
        assert backend.amp == pytest.approx(0.3)
        assert backend.is_ready()


def test_unknown_backend_is_rejected():
    settings = AppSettings()
    settings.backend = "jack"
    with pytest.raises(ValueError):
        create_audio_backend(settings)
