import hashlib

import pytest

from partsplit.config import Settings
from partsplit.libs.file_parts import ChecksumMismatchError, NotFoundError, SplitByCount
from partsplit.services import JobStatusValue, MergeJob, PartsPipeline, SplitJob


@pytest.fixture
def pipeline():
    return PartsPipeline(settings=Settings(chunk_size=5, default_checksum="sha256"))


def test_split_then_merge_jobs(pipeline, make_file, tmp_path):
    source = make_file(64)

    split_state = pipeline.run_split(
        SplitJob(source_path=source, output_dir=tmp_path / "parts", request=SplitByCount(3))
    )

    assert split_state.status is JobStatusValue.COMPLETED
    assert split_state.metrics["part_count"] == 3
    assert split_state.metrics["part_sizes"] == [22, 21, 21]
    assert split_state.metrics["checksum"] == hashlib.sha256(source.read_bytes()).hexdigest()
    checksum_path = tmp_path / "parts" / "data.bin.checksum.sha256"
    assert split_state.files_created[-1] == str(checksum_path)

    merge_state = pipeline.run_merge(
        MergeJob(
            part_paths=[p for p in split_state.files_created if not p.endswith(".sha256")],
            output_path=tmp_path / "merged.bin",
            checksum_path=checksum_path,
        )
    )

    assert merge_state.status is JobStatusValue.COMPLETED
    assert merge_state.metrics["checksum_verified"] is True
    assert (tmp_path / "merged.bin").read_bytes() == source.read_bytes()
    assert pipeline.get(merge_state.job_id) is merge_state


def test_job_specific_checksum_wins(pipeline, make_file, tmp_path):
    source = make_file(10)
    state = pipeline.run_split(
        SplitJob(
            source_path=source,
            output_dir=tmp_path / "parts",
            request=SplitByCount(2),
            checksum="md5",
        )
    )
    assert state.files_created[-1].endswith("data.bin.checksum.md5")


def test_failed_job_is_recorded(pipeline, tmp_path):
    store = pipeline.status_store
    created = pipeline.create("split")

    with pytest.raises(NotFoundError):
        pipeline.run_split(
            SplitJob(
                source_path=tmp_path / "missing.bin",
                output_dir=tmp_path / "parts",
                request=SplitByCount(2),
            ),
            job_id=created.job_id,
        )

    state = store[created.job_id]
    assert state.status is JobStatusValue.FAILED
    assert state.error_type == "NotFoundError"
    assert state.message.startswith("split failed: ")


def test_created_job_is_pending(pipeline):
    state = pipeline.create("merge")
    assert state.status is JobStatusValue.PENDING
    assert pipeline.get(state.job_id) is state
    assert pipeline.get("unknown") is None


def test_default_checksum_can_be_disabled(pipeline, make_file, tmp_path):
    source = make_file(10)
    state = pipeline.run_split(
        SplitJob(
            source_path=source,
            output_dir=tmp_path / "parts",
            request=SplitByCount(2),
            use_default_checksum=False,
        )
    )
    assert "checksum" not in state.metrics
    assert not list((tmp_path / "parts").glob("*.checksum.*"))


def test_binary_checksum_file_fails_merge_job(pipeline, make_file, tmp_path):
    source = make_file(30)
    split_state = pipeline.run_split(
        SplitJob(source_path=source, output_dir=tmp_path / "parts", request=SplitByCount(3))
    )
    checksum_path = tmp_path / "parts" / "data.bin.checksum.sha256"
    checksum_path.write_bytes(b"\xff\xfe\x00garbage")
    created = pipeline.create("merge")

    with pytest.raises(ChecksumMismatchError):
        pipeline.run_merge(
            MergeJob(
                part_paths=split_state.files_created[:-1],
                output_path=tmp_path / "merged.bin",
                checksum_path=checksum_path,
            ),
            job_id=created.job_id,
        )

    state = pipeline.get(created.job_id)
    assert state.status is JobStatusValue.FAILED
    assert state.error_type == "ChecksumMismatchError"
    assert not (tmp_path / "merged.bin").exists()
