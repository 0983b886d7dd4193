"""
Reaction Role Bot - Logger
===========================

Tree-style logger with console and file output.

Features:
- Unique run ID per process for telling sessions apart
- Tree-style formatting for structured data
- Daily log folders with separate log and error files
- Automatic cleanup of old log folders
- Debug output gated behind the DEBUG environment variable

Log Structure:
    logs/
    ├── 2026-10-18/
    │   ├── RoleBot-2026-10-18.log
    │   └── RoleBot-Errors-2026-10-18.log
    └── 2026-10-19/
        ├── RoleBot-2026-10-19.log
        └── RoleBot-Errors-2026-10-19.log
"""

import os
import shutil
import traceback
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any, List, Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


# =============================================================================
# Constants
# =============================================================================

LOG_RETENTION_DAYS = 7
LOG_FILE_PREFIX = "RoleBot"
DEFAULT_LOG_DIR = Path(__file__).parent.parent.parent / "logs"
DEFAULT_TIMEZONE = "UTC"


# =============================================================================
# Tree Symbols
# =============================================================================

class TreeSymbols:
    """Box-drawing characters for tree formatting."""
    BRANCH = "├─"
    LAST = "└─"


def _load_timezone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return ZoneInfo(DEFAULT_TIMEZONE)


# =============================================================================
# MiniTreeLogger
# =============================================================================

class MiniTreeLogger:
    """Logger that renders every entry as a small tree."""

    def __init__(
        self,
        log_dir: Optional[Path] = None,
        timezone: Optional[str] = None,
    ) -> None:
        self.run_id: str = str(uuid.uuid4())[:8]

        self.logs_base_dir = Path(log_dir or os.getenv("LOG_DIR") or DEFAULT_LOG_DIR)
        self.logs_base_dir.mkdir(parents=True, exist_ok=True)

        self._timezone = _load_timezone(timezone or os.getenv("LOG_TIMEZONE") or DEFAULT_TIMEZONE)

        self.current_date = self._today()
        self._set_log_files()

        self._cleanup_old_logs()
        self._write_header(f"NEW SESSION - RUN ID: {self.run_id}")

    # =========================================================================
    # Private Methods - Setup
    # =========================================================================

    def _today(self) -> str:
        return datetime.now(self._timezone).strftime("%Y-%m-%d")

    def _set_log_files(self) -> None:
        self.log_dir = self.logs_base_dir / self.current_date
        self.log_dir.mkdir(exist_ok=True)
        self.log_file: Path = self.log_dir / f"{LOG_FILE_PREFIX}-{self.current_date}.log"
        self.error_file: Path = self.log_dir / f"{LOG_FILE_PREFIX}-Errors-{self.current_date}.log"

    def _check_date_rotation(self) -> None:
        """Switch to a new daily folder when the date changes."""
        current_date = self._today()
        if current_date != self.current_date:
            self.current_date = current_date
            self._set_log_files()
            self._write_header(f"LOG ROTATION - Continuing session {self.run_id}")

    def _cleanup_old_logs(self) -> None:
        """Delete daily folders older than LOG_RETENTION_DAYS."""
        now = datetime.now(self._timezone)
        deleted_count = 0

        try:
            for folder in self.logs_base_dir.iterdir():
                if not folder.is_dir():
                    continue

                try:
                    folder_date = datetime.strptime(folder.name, "%Y-%m-%d").replace(tzinfo=self._timezone)
                except ValueError:
                    continue

                if (now - folder_date).days > LOG_RETENTION_DAYS:
                    shutil.rmtree(folder)
                    deleted_count += 1
        except OSError as e:
            print(f"[LOG CLEANUP ERROR] {e}")
            return

        if deleted_count > 0:
            print(f"[LOG CLEANUP] Deleted {deleted_count} old log folders (>{LOG_RETENTION_DAYS} days)")

    def _write_header(self, title: str) -> None:
        header = (
            f"\n{'='*60}\n"
            f"{title}\n"
            f"{self._get_timestamp()}\n"
            f"{'='*60}\n\n"
        )
        self._append(self.log_file, header)
        self._append(self.error_file, header)

    # =========================================================================
    # Private Methods - Output
    # =========================================================================

    def _get_timestamp(self) -> str:
        current_time = datetime.now(self._timezone)
        return current_time.strftime(f"[%I:%M:%S %p {current_time.strftime('%Z')}]")

    @staticmethod
    def _append(path: Path, text: str) -> None:
        try:
            with open(path, "a", encoding="utf-8") as f:
                f.write(text)
        except OSError:
            pass

    def _emit(self, line: str, to_error: bool = False) -> None:
        print(line)
        self._append(self.log_file, f"{line}\n")
        if to_error:
            self._append(self.error_file, f"{line}\n")

    def _log(
        self,
        title: str,
        emoji: str,
        items: Optional[List[Tuple[str, Any]]],
        status: str,
        to_error: bool = False,
    ) -> None:
        self._check_date_rotation()
        self._emit(f"{self._get_timestamp()} {emoji} {title.strip()}", to_error)

        rows = items if items else [("Status", status)]
        for i, (key, value) in enumerate(rows):
            prefix = TreeSymbols.LAST if i == len(rows) - 1 else TreeSymbols.BRANCH
            self._emit(f"  {prefix} {key}: {value}", to_error)

        self._emit("", to_error)

    # =========================================================================
    # Public Methods - Log Levels
    # =========================================================================

    def info(self, msg: str, details: Optional[List[Tuple[str, Any]]] = None) -> None:
        self._log(msg, "ℹ️", details, "OK")

    def success(self, msg: str, details: Optional[List[Tuple[str, Any]]] = None) -> None:
        self._log(msg, "✅", details, "Complete")

    def warning(self, msg: str, details: Optional[List[Tuple[str, Any]]] = None) -> None:
        """Log a warning (also written to the error file)."""
        self._log(msg, "⚠️", details, "Warning", to_error=True)

    def error(self, msg: str, details: Optional[List[Tuple[str, Any]]] = None) -> None:
        """Log an error (also written to the error file)."""
        self._log(msg, "❌", details, "Failed", to_error=True)

    def debug(self, msg: str, details: Optional[List[Tuple[str, Any]]] = None) -> None:
        """Log a debug message, only when DEBUG is set."""
        if os.getenv("DEBUG", "").lower() in ("1", "true", "yes"):
            self._log(msg, "🔍", details, "Debug")

    def exception(self, msg: str, details: Optional[List[Tuple[str, Any]]] = None) -> None:
        """Log an error followed by the active traceback in both files."""
        self._log(msg, "💥", details, "Exception", to_error=True)
        tb = traceback.format_exc()
        self._append(self.log_file, f"{tb}\n")
        self._append(self.error_file, f"{tb}\n")

    # =========================================================================
    # Public Methods - Tree Formatting
    # =========================================================================

    def tree(
        self,
        title: str,
        items: List[Tuple[str, Any]],
        emoji: str = "📦"
    ) -> None:
        """
        Log structured data in tree format.

        Example output:
            [12:00:00 PM UTC] 📦 Role Added
              ├─ Role: Verified
              ├─ Member: someone
              └─ Member ID: 123456789

        Args:
            title: Tree title/header
            items: List of (key, value) tuples
            emoji: Emoji prefix for title
        """
        self._log(title, emoji, items, "OK")

    def error_tree(
        self,
        title: str,
        error: Exception,
        context: Optional[List[Tuple[str, Any]]] = None
    ) -> None:
        """Log an exception's type and message plus optional context."""
        items: List[Tuple[str, Any]] = [
            ("Type", type(error).__name__),
            ("Message", str(error)),
        ]
        if context:
            items.extend(context)

        self._log(title, "❌", items, "Failed", to_error=True)

    def startup_tree(
        self,
        bot_name: str,
        bot_id: int,
        guilds: int,
        latency: float,
        extra: Optional[List[Tuple[str, Any]]] = None
    ) -> None:
        """
        Log bot startup information in tree format.

        Args:
            bot_name: Name of the bot
            bot_id: Discord bot ID
            guilds: Number of guilds
            latency: WebSocket latency in ms
            extra: Additional startup info
        """
        items: List[Tuple[str, Any]] = [
            ("Bot ID", bot_id),
            ("Guilds", guilds),
            ("Latency", f"{latency:.0f}ms"),
            ("Run ID", self.run_id),
        ]
        if extra:
            items.extend(extra)

        self.tree(f"Bot Ready: {bot_name}", items, emoji="🤖")


# =============================================================================
# Module Export
# =============================================================================

logger = MiniTreeLogger()

__all__ = ["logger", "MiniTreeLogger", "TreeSymbols"]
