# tests/test_factory.py
from unittest.mock import patch

import pytest

from mangaflow.enhancer.errors import MissingCredentialError
from mangaflow.enhancer.models import EnhancerConfig
from mangaflow.factory import build_orchestrator
from mangaflow.orchestrator import BatchOrchestrator


def test_sin_credencial_no_construye_el_cliente():
    with patch("mangaflow.factory.load_enhancer_config") as mock_load, \
         patch("mangaflow.factory.GeminiEnhancer") as mock_enhancer:
        mock_load.return_value = EnhancerConfig(api_key=None)

        with pytest.raises(MissingCredentialError):
            build_orchestrator()

        mock_enhancer.assert_not_called()


def test_ensambla_con_output_dir_explicito(tmp_path):
    with patch("mangaflow.factory.load_enhancer_config") as mock_load, \
         patch("mangaflow.factory.GeminiEnhancer"), \
         patch("mangaflow.factory.ResultExporter") as mock_exporter:
        mock_load.return_value = EnhancerConfig(api_key="k", output_dir=tmp_path / "config")

        orchestrator = build_orchestrator(config_path="cfg.yaml", output_dir=tmp_path / "cli")

        assert isinstance(orchestrator, BatchOrchestrator)
        mock_load.assert_called_once_with("cfg.yaml")
        mock_exporter.assert_called_once_with(tmp_path / "cli")


def test_sin_output_dir_usa_el_del_config(tmp_path):
    with patch("mangaflow.factory.load_enhancer_config") as mock_load, \
         patch("mangaflow.factory.GeminiEnhancer"), \
         patch("mangaflow.factory.ResultExporter") as mock_exporter:
        mock_load.return_value = EnhancerConfig(api_key="k", output_dir=tmp_path / "config")

        build_orchestrator()

        mock_exporter.assert_called_once_with(tmp_path / "config")
