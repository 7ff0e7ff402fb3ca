"""Tests for the offline re-grading entry point."""
import json

import pytest

from app.startup import run_application


def _payload(words, prosody=80.0):
    return {
        "DisplayText": " ".join(w for w, _ in words),
        "NBest": [
            {
                "PronunciationAssessment": {"AccuracyScore": 90, "ProsodyScore": prosody},
                "Words": [
                    {
                        "Word": w,
                        "Offset": i * 2_000_000,
                        "Duration": 1_500_000,
                        "PronunciationAssessment": {"AccuracyScore": a, "ErrorType": "None"},
                    }
                    for i, (w, a) in enumerate(words)
                ],
            }
        ],
    }


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("config.config.load_dotenv", lambda: False)
    for name in ("ASSESSMENT_LANGUAGE", "ASSESSMENT_ENABLE_MISCUE", "AZURE_OPENAI_API_KEY", "DEBUG", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


class TestRunApplication:
    """Tests for run_application."""

    def test_prints_report(self, workdir, capsys):
        # Arrange
        (workdir / "reference.txt").write_text("Hello big world.", encoding="utf-8")
        (workdir / "results.json").write_text(
            json.dumps([_payload([("hello", 90.0), ("world", 70.0)])]), encoding="utf-8"
        )

        # Act
        code = run_application(["--reference", "reference.txt", "--results", "results.json"])

        # Assert
        assert code == 0
        output = json.loads(capsys.readouterr().out)
        assert output["report"]["accuracy"] == pytest.approx(160.0 / 3)
        assert [w["error_type"] for w in output["report"]["words"]] == ["None", "Omission", "None"]

    def test_segmented_language_uses_calibration(self, workdir, capsys):
        # Arrange
        (workdir / "reference.txt").write_text("中国人民很好。", encoding="utf-8")
        (workdir / "calibration.json").write_text(
            json.dumps(_payload([("中国", 90.0), ("人民", 90.0), ("很好", 90.0)])), encoding="utf-8"
        )
        (workdir / "results.json").write_text(
            json.dumps([_payload([("中国", 80.0), ("人民", 100.0), ("很好", 90.0)])]), encoding="utf-8"
        )

        # Act
        code = run_application(
            [
                "--language", "zh-CN",
                "--reference", "reference.txt",
                "--results", "results.json",
                "--calibration", "calibration.json",
            ]
        )

        # Assert
        assert code == 0
        report = json.loads(capsys.readouterr().out)["report"]
        assert report["completeness"] == pytest.approx(100.0)
        assert report["accuracy"] == pytest.approx(90.0)

    def test_segmented_language_without_calibration_fails(self, workdir):
        # Arrange
        (workdir / "reference.txt").write_text("中国人民", encoding="utf-8")
        (workdir / "results.json").write_text(json.dumps([_payload([("中国", 80.0)])]), encoding="utf-8")

        # Act
        code = run_application(["--language", "zh-CN", "--reference", "reference.txt", "--results", "results.json"])

        # Assert
        assert code == 1

    def test_results_must_be_a_list(self, workdir):
        # Arrange
        (workdir / "reference.txt").write_text("Hello", encoding="utf-8")
        (workdir / "results.json").write_text(json.dumps({"DisplayText": "Hello"}), encoding="utf-8")

        # Act
        code = run_application(["--reference", "reference.txt", "--results", "results.json"])

        # Assert
        assert code == 2

    def test_invalid_json_results_file(self, workdir):
        # Arrange
        (workdir / "reference.txt").write_text("Hello", encoding="utf-8")
        (workdir / "results.json").write_text("{not json", encoding="utf-8")

        # Act
        code = run_application(["--reference", "reference.txt", "--results", "results.json"])

        # Assert
        assert code == 2

    @pytest.mark.parametrize("missing", ["--results", "--calibration", "--reference"])
    def test_missing_input_file(self, workdir, missing):
        # Arrange
        (workdir / "reference.txt").write_text("Hello", encoding="utf-8")
        (workdir / "results.json").write_text(json.dumps([_payload([("hello", 90.0)])]), encoding="utf-8")
        (workdir / "calibration.json").write_text(json.dumps(_payload([("hello", 90.0)])), encoding="utf-8")
        argv = ["--reference", "reference.txt", "--results", "results.json", "--calibration", "calibration.json"]
        argv[argv.index(missing) + 1] = "does_not_exist.json"

        # Act
        code = run_application(argv)

        # Assert
        assert code == 2

    def test_content_scores_without_scorer_are_null(self, workdir, capsys):
        # Arrange
        (workdir / "reference.txt").write_text("Hello", encoding="utf-8")
        (workdir / "results.json").write_text(json.dumps([_payload([("hello", 90.0)])]), encoding="utf-8")

        # Act
        code = run_application(["--reference", "reference.txt", "--results", "results.json", "--score-content"])

        # Assert
        assert code == 0
        assert json.loads(capsys.readouterr().out)["content"] is None
