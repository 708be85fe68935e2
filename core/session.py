import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

from core import transforms
from core.constants import (
    DEFAULT_MASTER_COLOR,
    DEFAULT_SESSION_NAME,
    DEFAULT_SHUFFLE_COLORS,
    OUTPUT_FOLDER,
)
from core.errors import NothingToSaveError, ParseError, ReadFailure
from core.extractor import ColorExtractor, folders_of
from core.history import History, Snapshot
from core.session_file import dumps_session, export_session, import_session, loads_session, session_file_name
from core.types import RGBA, ColorOptions, ColorParameter, KeywordDictionary, LoadReport, SourceFile
from core.util.file import read_source_files, write_files
from core.view import DisplayState, visible_parameters
from core.writer import serialize

log = logging.getLogger()


class EditorSession:
    """
    The one mutable editing session: loaded documents, parameter history, selection.

    All color changes go through pure functions in core.transforms and land here as a
    new history snapshot, so undo/redo only ever moves the cursor.
    """

    def __init__(self, dictionary: Optional[KeywordDictionary] = None):
        self.extractor = ColorExtractor(dictionary)
        self.history = History()
        self.original_files: Dict[str, Any] = {}
        self.selection: set[str] = set()
        self.folders: List[str] = []
        self.display = DisplayState()
        self._reset_staged()

    def _reset_staged(self):
        self.options = ColorOptions()
        self.master_color = DEFAULT_MASTER_COLOR
        self.hue_shift = 0
        self.shuffle_colors = list(DEFAULT_SHUFFLE_COLORS)
        self.session_name = DEFAULT_SESSION_NAME
        self.output_directory: Optional[Path] = None

    @property
    def dictionary(self) -> Optional[KeywordDictionary]:
        return self.extractor.dictionary

    @dictionary.setter
    def dictionary(self, dictionary: Optional[KeywordDictionary]):
        self.extractor.dictionary = dictionary

    @property
    def parameters(self) -> Snapshot:
        return self.history.current

    def parameter(self, param_id: str) -> Optional[ColorParameter]:
        return next((p for p in self.parameters if p.id == param_id), None)

    # loading

    def load(self, files: Iterable[SourceFile], append: Optional[bool] = None) -> LoadReport:
        """
        Extract colors from a batch of files.

        Without `append` (the default when nothing is loaded yet) the batch replaces the
        session and starts a new history. Appending skips files that are already loaded
        and commits the combined list as one undoable step. A file that is not valid JSON
        is reported and skipped, the rest of the batch still loads.
        """
        if append is None:
            append = bool(self.parameters)

        report = LoadReport()
        original_files = dict(self.original_files) if append else {}
        params = list(self.parameters) if append else []

        for source in files:
            if source.relative_path in original_files:
                log.debug(f"Skipping {source.relative_path}, already loaded")
                report.skipped.append(source.relative_path)
                continue
            try:
                document = json.loads(source.text)
            except json.JSONDecodeError as e:
                error = ParseError(source.relative_path, str(e))
                log.error(f"Error processing file {source.name}: {error}")
                report.errors.append(error)
                continue

            original_files[source.relative_path] = document
            extracted = self.extractor.extract(document, source.name, source.relative_path)
            params.extend(extracted)
            report.loaded.append(source.relative_path)
            report.parameter_count += len(extracted)

        self.original_files = original_files
        if append:
            self.history.commit(params)
        else:
            self.history.replace(params)
            self.selection = set()

        self.folders = folders_of(params)
        self.display.selected_folders = set(self.folders)

        log.info(f"Loaded {len(report.loaded)} file(s), {report.parameter_count} color parameter(s)"
                 + (f", {len(report.errors)} error(s)" if report.errors else ""))
        return report

    def load_paths(self, paths: Iterable[Path], append: Optional[bool] = None) -> LoadReport:
        # ReadFailure leaves the session untouched
        return self.load(read_source_files(paths), append)

    # history

    def commit(self, params: Sequence[ColorParameter]):
        self.history.commit(params)

    def undo(self) -> bool:
        return self.history.undo()

    def redo(self) -> bool:
        return self.history.redo()

    def reset(self):
        self.history.reset()
        self.original_files = {}
        self.selection = set()
        self.folders = []
        self.display = DisplayState()
        self._reset_staged()
        log.info("Session reset")

    # transforms

    def apply_master_color(self, hex_color: Optional[str] = None):
        if hex_color is not None:
            self.master_color = hex_color
        self.commit(transforms.apply_master_color(self.parameters, self.selection, self.master_color, self.options))

    def apply_hue_shift(self, degrees: Optional[float] = None):
        if degrees is not None:
            self.hue_shift = degrees
        self.commit(transforms.apply_hue_shift(self.parameters, self.selection, self.hue_shift, self.options))
        self.hue_shift = 0

    def apply_shuffle(self):
        self.commit(transforms.apply_shuffle(self.parameters, self.selection, self.shuffle_colors, self.options))

    def edit_color(self, param_id: str, hex_color: str):
        self.commit(transforms.edit_parameter_color(self.parameters, param_id, hex_color, self.options))

    def edit_channel(self, param_id: str, channel: str, value):
        self.commit(transforms.edit_parameter_channel(self.parameters, param_id, channel, value))

    def preview(self, param: ColorParameter) -> RGBA:
        return transforms.preview_rgba(param, self.selection, self.hue_shift, self.options)

    def is_previewing(self, param: ColorParameter) -> bool:
        return transforms.is_previewing(param, self.selection, self.hue_shift, self.options)

    def visible_parameters(self) -> List[ColorParameter]:
        return visible_parameters(self.parameters, self.folders, self.display)

    # output

    def save(self, base_directory: Optional[Path] = None) -> List[Path]:
        """Write every loaded file, with current colors, to `<base_directory>/output`."""
        if not self.parameters:
            raise NothingToSaveError("No parameters to save.")
        base_directory = Path(base_directory) if base_directory else self.output_directory
        if base_directory is None:
            raise ValueError("No output directory chosen")

        written = write_files(base_directory / OUTPUT_FOLDER, serialize(self.original_files, self.parameters))
        self.output_directory = base_directory
        return written

    def export_session(self, directory: Path) -> Path:
        entries = export_session(self.parameters, self.selection)
        file_name = session_file_name(self.session_name)
        written = write_files(Path(directory), [(file_name, dumps_session(entries))])
        log.info(f"Exported {len(entries)} parameter(s) to {written[0]}")
        return written[0]

    def import_session_text(self, text: str) -> int:
        params, updated = import_session(self.parameters, loads_session(text))
        self.commit(params)
        return updated

    def import_session(self, path: Path) -> int:
        try:
            text = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ReadFailure(f"Failed to read session file {path}: {e}") from e
        return self.import_session_text(text)
