"""
Batch orchestrator: for each approved quest, fetch its Java class, extract a
QuestRecord and write <output_dir>/<slug>.json. One quest failing never stops
the batch; each quest ends DONE or SKIPPED.

The output directory holds quest records only: every *.json there is read as
a quest by the map frontend. The optional index is written to its own path.
"""

import json
import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional

from .assembler import extract_quest
from .fetcher import FetchError
from .java_source import SourceUnit, extract_class_name
from .models import QuestRecord
from .naming import class_name_to_display_name, class_name_to_folder, display_name_to_class_name

logger = logging.getLogger(__name__)


class QuestState(Enum):
    PENDING = "pending"
    FETCHING = "fetching"
    EXTRACTING = "extracting"
    WRITING = "writing"
    DONE = "done"
    SKIPPED = "skipped"


class ApprovedListError(Exception):
    """The approved-quests list is missing or malformed; nothing can be processed."""


@dataclass
class QuestOutcome:
    display_name: str
    state: QuestState = QuestState.PENDING
    name: str = ""
    slug: str = ""
    path: str = ""
    step_count: int = 0
    error: str = ""
    # State where a skipped quest failed
    failed_in: Optional[QuestState] = None

    @property
    def succeeded(self) -> bool:
        return self.state is QuestState.DONE


@dataclass
class BatchSummary:
    outcomes: List[QuestOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return sum(1 for o in self.outcomes if o.succeeded)

    @property
    def skipped(self) -> int:
        return sum(1 for o in self.outcomes if o.state is QuestState.SKIPPED)


def load_approved_quests(path: str) -> List[str]:
    """
    Read a JSON object of quest display name -> approved flag.

    Returns names whose flag is exactly true, in file order.
    Raises ApprovedListError if the file cannot be read or is not such an object.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ApprovedListError(f"Could not read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ApprovedListError(f"{path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ApprovedListError(f"{path} must hold a JSON object of quest name -> true/false")
    return [name for name, approved in data.items() if approved is True]


def write_quest_file(output_dir: str, slug: str, record: QuestRecord) -> str:
    """
    Write one quest record; returns the file path. OSError propagates to the caller.

    The JSON goes to <slug>.json.tmp first and is moved into place only once
    complete, so a failed write never leaves a partial <slug>.json behind.
    """
    os.makedirs(output_dir, exist_ok=True)
    file_path = os.path.join(output_dir, f"{slug}.json")
    tmp_path = f"{file_path}.tmp"
    try:
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(record.to_dict(), f, indent=2, ensure_ascii=False)
        os.replace(tmp_path, file_path)
    except OSError:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise
    return file_path


def _skip(outcome: QuestOutcome, reason: str, message: str) -> QuestOutcome:
    outcome.failed_in = outcome.state
    outcome.state = QuestState.SKIPPED
    outcome.error = message
    logger.warning('Skipping "%s": %s failed - %s', outcome.display_name, reason, message)
    return outcome


def process_quest(display_name: str, fetcher, output_dir: str) -> QuestOutcome:
    """Fetch, extract and write one quest. Failures are recorded on the outcome, never raised."""
    outcome = QuestOutcome(display_name=display_name)
    class_name = display_name_to_class_name(display_name)

    outcome.state = QuestState.FETCHING
    try:
        unit = SourceUnit(display_name, fetcher.fetch(class_name))
    except FetchError as e:
        return _skip(outcome, "fetch", str(e))

    outcome.state = QuestState.EXTRACTING
    declared = extract_class_name(unit.text)
    outcome.name = class_name_to_display_name(declared) if declared else display_name
    outcome.slug = class_name_to_folder(declared or class_name)
    try:
        record = extract_quest(unit.text, outcome.name)
    except Exception as e:
        logger.debug("Extraction error for %s", display_name, exc_info=True)
        return _skip(outcome, "extraction", f"{type(e).__name__}: {e}")
    outcome.step_count = record.step_count

    outcome.state = QuestState.WRITING
    try:
        outcome.path = write_quest_file(output_dir, outcome.slug, record)
    except OSError as e:
        return _skip(outcome, "write", str(e))

    outcome.state = QuestState.DONE
    logger.info("Wrote %s (%d steps)", outcome.path, outcome.step_count)
    return outcome


def write_index(index_path: str, outcomes: List[QuestOutcome]) -> Optional[str]:
    """
    Write a JSON list of every written quest (name, slug, file, stepCount),
    sorted by slug. Returns index_path, or None on failure.

    index_path must lie outside the quest output directory.
    """
    entries: Dict[str, Dict] = {}
    for o in outcomes:
        if o.succeeded:
            entries[o.slug] = {
                "name": o.name,
                "slug": o.slug,
                "file": f"{o.slug}.json",
                "stepCount": o.step_count,
            }
    try:
        index_dir = os.path.dirname(index_path)
        if index_dir:
            os.makedirs(index_dir, exist_ok=True)
        with open(index_path, "w", encoding="utf-8") as f:
            json.dump([entries[slug] for slug in sorted(entries)], f, indent=2, ensure_ascii=False)
    except OSError as e:
        logger.warning("Could not write %s: %s", index_path, e)
        return None
    return index_path


def run_batch(
    display_names: List[str],
    fetcher,
    output_dir: str,
    workers: int = 1,
    progress_callback: Optional[Callable[[int, int, QuestOutcome], None]] = None,
    index_path: Optional[str] = None,
) -> BatchSummary:
    """
    Process every quest exactly once. With workers > 1 quests run on a bounded
    thread pool; outcomes are still returned in input order.

    progress_callback(completed_count, total, outcome) is called as each quest finishes.
    When index_path is given, a quest index is written there after the run.
    """
    total = len(display_names)
    completed = 0

    def report(outcome: QuestOutcome) -> QuestOutcome:
        nonlocal completed
        completed += 1
        if progress_callback:
            progress_callback(completed, total, outcome)
        return outcome

    if workers <= 1:
        outcomes = [report(process_quest(name, fetcher, output_dir)) for name in display_names]
    else:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [pool.submit(process_quest, name, fetcher, output_dir) for name in display_names]
            for future in as_completed(futures):
                report(future.result())
            outcomes = [future.result() for future in futures]

    summary = BatchSummary(outcomes)
    if index_path and summary.succeeded:
        write_index(index_path, summary.outcomes)
    logger.info("Done: %d written, %d skipped", summary.succeeded, summary.skipped)
    return summary
