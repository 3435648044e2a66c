# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Timed lifecycle of the single authenticated session slot."""

from __future__ import annotations

import locale
import platform
import time
from datetime import datetime

from syntrio.application.interfaces import (
    ActivitySource,
    Clock,
    EventPublisher,
    TimerHandle,
    TimerScheduler,
)
from syntrio.domain.sessions import (
    ActivitySignal,
    Session,
    SessionEvent,
    SessionEventKind,
    SessionInfo,
    SessionRepository,
    SessionState,
    SessionWarning,
    WorkBackupRepository,
    WorkInProgress,
)
from syntrio.shared.config import SessionConfig
from syntrio.shared.ids import generate_id
from syntrio.shared.logging import clear_correlation_id, logger, set_correlation_id


def format_time_remaining(seconds: float) -> str:
    if seconds <= 0:
        return "<1m"
    hours = int(seconds // 3600)
    minutes = int(seconds % 3600 // 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    if minutes > 0:
        return f"{minutes}m"
    return "<1m"


def default_device_info() -> str:
    system = platform.system() or "unknown"
    language = locale.getlocale()[0] or "unknown"
    agent = f"Python/{platform.python_version()} ({platform.platform()})"
    return f"{system} - {language} - {agent[:50]}..."


class SessionLifecycleManager:
    """Owns session creation, sliding extension, warning and expiry.

    Warning and expiry notifications go out as :class:`SessionEvent` values on
    the injected publisher. Timers are re-armed only after clearing the ones
    already armed, so each kind fires at most once per arming.
    """

    def __init__(
        self,
        *,
        sessions: SessionRepository,
        backups: WorkBackupRepository,
        scheduler: TimerScheduler,
        activity: ActivitySource,
        events: EventPublisher,
        config: SessionConfig,
        clock: Clock = time.time,
        device_info: str | None = None,
    ) -> None:
        self._sessions = sessions
        self._backups = backups
        self._scheduler = scheduler
        self._activity = activity
        self._events = events
        self._config = config
        self._clock = clock
        self._device_info = device_info

        self._state = SessionState.NO_SESSION
        self._warning_timer: TimerHandle | None = None
        self._expiry_timer: TimerHandle | None = None
        self._last_activity_time = clock()
        self._staged: WorkInProgress | None = None
        self._activity_listener = self._on_activity
        self._listening = False

    @property
    def state(self) -> SessionState:
        return self._state

    # Lifecycle

    def start(self) -> Session | None:
        """Attach to activity signals and resume a stored session if still valid."""

        if not self._listening:
            self._activity.add_listener(self._activity_listener)
            self._listening = True

        session = self._sessions.load()
        if session is None:
            self._state = SessionState.NO_SESSION
            return None

        if not session.is_valid(self._clock()):
            logger.info(f"session: stale session cleared session_id={session.session_id}")
            self._sessions.delete()
            self._state = SessionState.NO_SESSION
            return None

        self._state = SessionState.ACTIVE
        set_correlation_id(session.session_id)
        logger.info(f"session: resumed session_id={session.session_id}")
        self._events.publish(SessionEvent(SessionEventKind.RESUMED, session.session_id))
        self._arm_timers(session)
        return session

    def cleanup(self) -> None:
        self._clear_timers()
        if self._listening:
            self._activity.remove_listener(self._activity_listener)
            self._listening = False

    # Session slot

    def create_session(self, user_id: str, email: str, name: str) -> Session:
        now = self._clock()
        previous = self._sessions.load()
        was_warning = self._state is SessionState.WARNING
        session = Session(
            user_id=user_id,
            email=email,
            name=name,
            session_id=generate_id("session", now),
            login_time=now,
            last_activity=now,
            expires_at=now + self._config.duration,
            device_info=self._device_info or default_device_info(),
        )
        self._sessions.save(session)
        self._clear_timers()
        self._staged = None
        if was_warning:
            replaced_id = previous.session_id if previous else None
            self._events.publish(
                SessionEvent(SessionEventKind.WARNING_HIDDEN, replaced_id, SessionWarning.hidden())
            )
        self._state = SessionState.ACTIVE
        set_correlation_id(session.session_id)
        logger.info(f"session: created session_id={session.session_id} user_id={user_id}")
        self._events.publish(SessionEvent(SessionEventKind.CREATED, session.session_id))
        self._arm_timers(session)
        return session

    def get_current_session(self) -> Session | None:
        session = self._sessions.load()
        if session is None:
            return None
        if not session.is_valid(self._clock()):
            self._expire()
            return None
        return session

    def is_session_valid(self) -> bool:
        return self.get_current_session() is not None

    def extend_session(self) -> bool:
        session = self.get_current_session()
        if session is None:
            return False

        extended = session.extended(self._clock(), self._config.duration)
        self._sessions.save(extended)
        logger.info(f"session: extended session_id={extended.session_id}")
        self._after_extension(extended)
        return True

    def clear_session(self) -> None:
        """Log out: drop the record and timers without backing up work."""

        session = self._sessions.load()
        was_warning = self._state is SessionState.WARNING
        had_session = session is not None or self._state in (SessionState.ACTIVE, SessionState.WARNING)

        self._sessions.delete()
        self._clear_timers()
        self._staged = None

        if not had_session:
            return

        self._state = SessionState.LOGGED_OUT
        session_id = session.session_id if session else None
        if was_warning:
            self._events.publish(SessionEvent(SessionEventKind.WARNING_HIDDEN, session_id, SessionWarning.hidden()))
        self._events.publish(SessionEvent(SessionEventKind.LOGGED_OUT, session_id))
        logger.info(f"session: logged out session_id={session_id}")
        clear_correlation_id()

    def force_logout(self) -> None:
        self._expire()

    def get_time_remaining(self) -> float:
        session = self.get_current_session()
        if session is None:
            return 0.0
        return session.remaining(self._clock())

    def get_session_info(self) -> SessionInfo | None:
        session = self.get_current_session()
        if session is None:
            return None
        return SessionInfo(
            time_remaining=format_time_remaining(session.remaining(self._clock())),
            device_info=session.device_info,
            login_time=datetime.fromtimestamp(session.login_time).strftime("%Y-%m-%d %H:%M:%S"),
        )

    # Work in progress

    def stage_work_in_progress(self, snapshot: WorkInProgress | None) -> None:
        self._staged = snapshot

    def backup_work_in_progress(self, snapshot: WorkInProgress | None = None) -> None:
        if snapshot is None:
            return
        self._backups.save(snapshot.stamped(self._clock()))
        logger.debug(f"session: work backed up step={snapshot.wizard_step}")

    def restore_work_in_progress(self) -> WorkInProgress | None:
        # Old backups are filtered out, not deleted.
        snapshot = self._backups.load()
        if snapshot is None:
            return None
        if not snapshot.is_fresh(self._clock(), self._config.backup_freshness):
            return None
        return snapshot

    def clear_work_backup(self) -> None:
        self._backups.delete()

    # Internals

    def _on_activity(self, signal: ActivitySignal) -> None:
        now = self._clock()
        if now - self._last_activity_time <= self._config.activity_threshold:
            return
        self._last_activity_time = now
        self._update_activity(now)

    def _update_activity(self, now: float) -> None:
        session = self.get_current_session()
        if session is None:
            return

        if session.expires_at - now < self._config.duration / 2:
            extended = session.extended(now, self._config.duration)
            self._sessions.save(extended)
            logger.debug(f"session: sliding extension session_id={extended.session_id}")
            self._after_extension(extended)
            return

        self._sessions.save(session.touched(now))

    def _after_extension(self, session: Session) -> None:
        was_warning = self._state is SessionState.WARNING
        self._state = SessionState.ACTIVE
        self._arm_timers(session)
        if was_warning:
            self._events.publish(
                SessionEvent(SessionEventKind.WARNING_HIDDEN, session.session_id, SessionWarning.hidden())
            )
        self._events.publish(SessionEvent(SessionEventKind.EXTENDED, session.session_id))

    def _arm_timers(self, session: Session) -> None:
        self._clear_timers()

        now = self._clock()
        until_expiry = session.expires_at - now
        until_warning = until_expiry - self._config.warning_window

        if until_warning > 0:
            self._warning_timer = self._scheduler.call_later(until_warning, self._show_warning)
        elif until_expiry > 0:
            self._show_warning()

        if until_expiry > 0:
            self._expiry_timer = self._scheduler.call_later(until_expiry, self._expire)

    def _clear_timers(self) -> None:
        if self._warning_timer is not None:
            self._warning_timer.cancel()
            self._warning_timer = None
        if self._expiry_timer is not None:
            self._expiry_timer.cancel()
            self._expiry_timer = None

    def _show_warning(self) -> None:
        self._warning_timer = None
        session = self.get_current_session()
        if session is None:
            return

        self._state = SessionState.WARNING
        warning = SessionWarning(
            visible=True,
            time_remaining=session.remaining(self._clock()),
            extend=self._extend_from_warning,
            force_logout=self.force_logout,
        )
        logger.info(f"session: expiry warning remaining={warning.time_remaining:.0f}s")
        self._events.publish(SessionEvent(SessionEventKind.WARNING_SHOWN, session.session_id, warning))

    def _extend_from_warning(self) -> None:
        self.extend_session()

    def _expire(self) -> None:
        session = self._sessions.load()
        if session is None and self._state not in (SessionState.ACTIVE, SessionState.WARNING):
            return

        if self._staged is not None:
            self.backup_work_in_progress(self._staged)
            self._staged = None

        self._sessions.delete()
        self._clear_timers()
        self._state = SessionState.EXPIRED

        session_id = session.session_id if session else None
        logger.info(f"session: expired session_id={session_id}")
        self._events.publish(SessionEvent(SessionEventKind.EXPIRED, session_id))
        clear_correlation_id()


__all__ = ["SessionLifecycleManager", "default_device_info", "format_time_remaining"]
