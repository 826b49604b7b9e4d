#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
End-to-end tests for the p3mauve command-line entry points.
"""

import os
import json
import pytest
from unittest.mock import patch

# Import the pipeline module
from ... import pipeline
from ...config import Config


@pytest.fixture(autouse=True)
def mock_setup_logging():
    """Keep the tests from reconfiguring the root logger."""
    with patch('p3mauve.pipeline.setup_logging') as mock_setup:
        yield mock_setup


class TestArguments:
    """Tests for command-line parsing."""

    def test_genome_ids_required(self):
        with pytest.raises(SystemExit):
            pipeline.parse_arguments(["-o", "out"])

    def test_mauve_options(self):
        args = pipeline.parse_arguments(["-g", "1.1", "--seed-weight", "15", "--hmm-p-go-unrelated", "0.001"])

        assert args.seed_weight == "15"
        assert args.hmm_p_go_unrelated == "0.001"
        assert args.weight is None

    def test_invalid_recipe_rejected(self):
        with pytest.raises(SystemExit):
            pipeline.parse_arguments(["-g", "1.1", "--recipe", "muscle"])

    def test_debug_flags(self):
        assert pipeline.parse_arguments(["-g", "1.1"]).debug is False
        assert pipeline.parse_arguments(["-g", "1.1", "--debug"]).debug is True
        assert pipeline.parse_arguments(["-g", "1.1", "--debug", "xmfa_parser"]).debug == ["xmfa_parser"]

    def test_xmfa_input_required(self):
        with pytest.raises(SystemExit):
            pipeline.parse_xmfa_arguments([])


class TestXmfaConversion:
    """Tests for the xmfa2json entry point."""

    def test_conversion(self, sample_xmfa_file, mock_setup_logging):
        result = pipeline.run_xmfa_conversion(["-i", sample_xmfa_file, "--gaps"])

        assert result is True
        mock_setup_logging.assert_called_once_with(debug=False)

        json_path = sample_xmfa_file.replace(".xmfa", ".json")
        with open(json_path) as f:
            lcbs = json.load(f)
        assert len(lcbs) == 2
        assert lcbs[1][0]['gaps'] == [{'start': 3, 'end': 4}]
        assert lcbs[0][0]['name'] == "204722.5.fasta"

    def test_conversion_with_sequences_and_summary(self, sample_xmfa_file, temp_dir):
        json_path = os.path.join(temp_dir, "result.json")

        result = pipeline.run_xmfa_conversion(
            ["-i", sample_xmfa_file, "-o", json_path, "--include-seqs", "--summary"]
        )

        assert result is True
        with open(json_path) as f:
            lcbs = json.load(f)
        assert lcbs[0][0]['sequence'] == "ACGTACGT--AC"
        assert os.path.exists(os.path.join(temp_dir, "result.summary.csv"))

    def test_missing_input(self, temp_dir):
        result = pipeline.run_xmfa_conversion(["-i", os.path.join(temp_dir, "missing.xmfa")])

        assert result is False

    def test_config_file(self, sample_xmfa_file, temp_dir):
        config_path = os.path.join(temp_dir, "config.json")
        with open(config_path, 'w') as f:
            json.dump({'COMPUTE_GAPS': True}, f)

        result = pipeline.run_xmfa_conversion(["-i", sample_xmfa_file, "--config", config_path])

        assert result is True
        assert Config.COMPUTE_GAPS is True
        with open(sample_xmfa_file.replace(".xmfa", ".json")) as f:
            assert 'gaps' in json.load(f)[0][0]


class TestAlignmentPipeline:
    """Tests for the p3-mauve entry point."""

    @patch('p3mauve.pipeline.MauveRunner')
    @patch('p3mauve.pipeline.GenomeFetcher')
    def test_fetch_and_align(self, mock_fetcher_cls, mock_runner_cls, temp_dir):
        paths = [os.path.join(temp_dir, "1.1.fasta"), os.path.join(temp_dir, "2.2.fasta")]
        mock_fetcher_cls.return_value.fetch_genome_fastas.return_value = paths
        mock_runner_cls.return_value.run.return_value = os.path.join(temp_dir, "alignment.json")

        result = pipeline.run_pipeline(
            ["-g", "1.1,2.2", "-o", temp_dir, "--recipe", "mauveAligner", "--seed-weight", "15"]
        )

        assert result is True
        mock_fetcher_cls.assert_called_once_with(endpoint=None)
        mock_fetcher_cls.return_value.fetch_genome_fastas.assert_called_once_with(
            ["1.1", "2.2"], temp_dir, None
        )
        mock_runner_cls.return_value.run.assert_called_once_with(
            "mauveAligner", paths, {'seed-weight': "15"}, temp_dir
        )

    @patch('p3mauve.pipeline.MauveRunner')
    @patch('p3mauve.pipeline.GenomeFetcher')
    def test_job_string_and_server_config(self, mock_fetcher_cls, mock_runner_cls, temp_dir):
        jstring = json.dumps({'genome_ids': ["3.3"], 'output': temp_dir, 'weight': 200})
        sstring = json.dumps({'data_api': "https://example.org/api"})
        mock_fetcher_cls.return_value.fetch_genome_fastas.return_value = ["3.3.fasta"]

        result = pipeline.run_pipeline(["--jstring", jstring, "--sstring", sstring, "-s", "masked"])

        assert result is True
        mock_fetcher_cls.assert_called_once_with(endpoint="https://example.org/api")
        mock_fetcher_cls.return_value.fetch_genome_fastas.assert_called_once_with(
            ["3.3"], temp_dir, "masked"
        )
        mock_runner_cls.return_value.run.assert_called_once_with(None, ["3.3.fasta"], {'weight': 200}, temp_dir)

    @patch('p3mauve.pipeline.MauveRunner')
    @patch('p3mauve.pipeline.GenomeFetcher')
    def test_no_mauve(self, mock_fetcher_cls, mock_runner_cls, temp_dir):
        result = pipeline.run_pipeline(["-g", "1.1", "-o", temp_dir, "--no-mauve"])

        assert result is True
        mock_fetcher_cls.return_value.fetch_genome_fastas.assert_called_once()
        mock_runner_cls.assert_not_called()

    @patch('p3mauve.pipeline.GenomeFetcher')
    def test_missing_output(self, mock_fetcher_cls):
        """Nothing is fetched when the job has no output directory."""
        result = pipeline.run_pipeline(["-g", "1.1"])

        assert result is False
        mock_fetcher_cls.assert_not_called()

    @patch('p3mauve.pipeline.GenomeFetcher')
    def test_invalid_recipe_in_job(self, mock_fetcher_cls, temp_dir):
        jstring = json.dumps({'genome_ids': ["1.1"], 'recipe': "muscle"})

        result = pipeline.run_pipeline(["--jstring", jstring, "-o", temp_dir])

        assert result is False
        mock_fetcher_cls.assert_not_called()

    @patch('p3mauve.pipeline.GenomeFetcher')
    def test_unexpected_error(self, mock_fetcher_cls, temp_dir):
        mock_fetcher_cls.return_value.fetch_genome_fastas.side_effect = RuntimeError("boom")

        result = pipeline.run_pipeline(["-g", "1.1", "-o", temp_dir])

        assert result is False


class TestMain:
    """Tests for the console script wrappers."""

    @patch('p3mauve.pipeline.run_pipeline')
    def test_main_exit_code(self, mock_run):
        mock_run.return_value = False

        with pytest.raises(SystemExit) as exc_info:
            pipeline.main()

        assert exc_info.value.code == 1

    @patch('p3mauve.pipeline.run_xmfa_conversion')
    def test_xmfa_main_exit_code(self, mock_run):
        mock_run.return_value = True

        with pytest.raises(SystemExit) as exc_info:
            pipeline.xmfa_main()

        assert exc_info.value.code == 0
