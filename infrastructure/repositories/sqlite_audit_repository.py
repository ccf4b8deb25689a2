import sqlite3
import json
from typing import Optional, Dict, Any, List, Tuple
from datetime import datetime
import logging
from enum import Enum

log = logging.getLogger(__name__)

class AuditAction(str, Enum):
    LOGIN_SUCCESS = "LOGIN_SUCCESS"
    LOGIN_FAIL = "LOGIN_FAIL"
    LOGOUT = "LOGOUT"
    SESSION_FETCH_FAILED = "SESSION_FETCH_FAILED"
    GATE_REDIRECT = "GATE_REDIRECT"
    REDIRECT_STORED = "REDIRECT_STORED"
    REDIRECT_CONSUMED = "REDIRECT_CONSUMED"
    REDIRECT_DISCARDED = "REDIRECT_DISCARDED"
    ROUTE_DENIED = "ROUTE_DENIED"
    WELCOME_COMPLETE = "WELCOME_COMPLETE"

ALLOWED_METADATA_KEYS = {
    "reason", "action", "audience", "role", "account_type",
    "target", "error_message", "status_code"
}

class SQLiteAuditRepository:
    def __init__(self, db_path: str):
        self.db_path = db_path

    def _conn(self):
        return sqlite3.connect(self.db_path)

    def init_audit_db(self):
        with self._conn() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS audit_log (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    ts TEXT NOT NULL,
                    actor_user_id TEXT,
                    actor_role TEXT,
                    action TEXT NOT NULL,
                    target_type TEXT NOT NULL,
                    target_id TEXT,
                    metadata_json TEXT,
                    ip_address TEXT,
                    result TEXT NOT NULL
                )
            """)
            conn.execute("CREATE INDEX IF NOT EXISTS idx_audit_log_ts ON audit_log (ts)")
            conn.commit()

    def log_action(
        self,
        action: Any,
        target_type: str,
        actor_user_id: Optional[str] = None,
        actor_role: Optional[str] = None,
        target_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
        ip_address: Optional[str] = None,
        result: str = "success"
    ):
        """Logs an action to the audit repository. Metadata is JSON serialized and constrained."""
        try:
            meta_str = None
            if metadata is not None:
                safe_meta = {}
                for k, v in metadata.items():
                    if k in ALLOWED_METADATA_KEYS and "password" not in str(v).lower() and "token" not in str(v).lower():
                        safe_meta[k] = v
                try:
                    meta_str = json.dumps(safe_meta)
                    if len(meta_str) > 2000:
                        safe_meta["truncated"] = True
                        meta_str = json.dumps(safe_meta)[:2000]
                except (TypeError, ValueError):
                    meta_str = "{\"error\": \"unserializable\"}"

            # Truncate strings to prevent db inflation
            ts = datetime.utcnow().strftime("%Y-%m-%d %H:%M:%S")
            action_val = action.value if hasattr(action, "value") else str(action)[:50]
            if not action_val: action_val = "UNKNOWN"

            target_type = str(target_type)[:50] if target_type else "UNKNOWN"
            actor_user_id = str(actor_user_id)[:64] if actor_user_id is not None else None
            actor_role = str(actor_role)[:20] if actor_role is not None else None
            target_id = str(target_id)[:200] if target_id is not None else None
            ip_address = str(ip_address)[:45] if ip_address is not None else None
            result = str(result)[:20] if result else "unknown"

            with self._conn() as conn:
                conn.execute("""
                    INSERT INTO audit_log
                    (ts, actor_user_id, actor_role, action, target_type, target_id, metadata_json, ip_address, result)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """, (ts, actor_user_id, actor_role, action_val, target_type, target_id, meta_str, ip_address, result))
                conn.commit()
        except Exception as e:
            # Audit failures must not crash the main application
            log.error(f"Audit log failed for action {action}: {e}", exc_info=True)

    def get_logs(self, limit: int = 100, action_filter: Optional[str] = None, user_filter: Optional[str] = None) -> List[Tuple]:
        """Fetches the most recent audit logs for the admin view."""
        try:
            with self._conn() as conn:
                query = """
                    SELECT
                        id, ts, COALESCE(actor_user_id, 'ANONYMOUS'),
                        actor_role, action, target_type, target_id,
                        metadata_json, ip_address, result
                    FROM audit_log
                    WHERE 1=1
                """
                params = []
                if action_filter and action_filter != "All":
                    query += " AND action = ?"
                    params.append(action_filter)
                if user_filter and user_filter != "All":
                    query += " AND actor_user_id LIKE ?"
                    params.append(f"%{user_filter}%")

                query += " ORDER BY ts DESC, id DESC LIMIT ?"
                params.append(limit)

                return conn.execute(query, tuple(params)).fetchall()
        except Exception as e:
            log.error(f"Failed to fetch audit logs: {e}", exc_info=True)
            return []
