"""
Centralized logging service for Print Bee.
Persists structured log entries to SQLite so the proxy's failures and
security events can be inspected after the fact.
"""

import json
import traceback
from datetime import datetime
from flask import request, has_request_context
from .database import Database
from .config import get_config_value


class LoggingService:
    """Centralized logging service for application-wide logging"""

    @staticmethod
    def _log_db():
        return get_config_value('LOG_DB')

    @staticmethod
    def _ensure_logs_table(conn):
        cursor = conn.cursor()
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS app_logs (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                timestamp TEXT NOT NULL,
                level TEXT NOT NULL,
                source TEXT NOT NULL,
                message TEXT NOT NULL,
                details TEXT,
                ip_address TEXT,
                request_path TEXT
            )
        """)
        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_logs_timestamp
            ON app_logs(timestamp DESC)
        """)

    @staticmethod
    def _get_request_context():
        """Extract request context information"""
        if not has_request_context():
            return None, None

        ip_address = request.headers.get('X-Forwarded-For', request.remote_addr)
        if ip_address and ',' in ip_address:
            ip_address = ip_address.split(',')[0].strip()

        return ip_address, request.path

    @staticmethod
    def log(level, source, message, details=None):
        """
        Log a message to the database

        Args:
            level (str): Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            source (str): Source component (proxy, store, keepalive, portal)
            message (str): Main log message
            details (str/dict): Additional details (will be JSON-encoded if dict)
        """
        if isinstance(details, dict):
            details = json.dumps(details, indent=2, default=str)

        timestamp = datetime.now().isoformat()

        try:
            ip_address, request_path = LoggingService._get_request_context()

            with Database.connect(LoggingService._log_db()) as conn:
                LoggingService._ensure_logs_table(conn)
                conn.execute("""
                    INSERT INTO app_logs
                    (timestamp, level, source, message, details, ip_address, request_path)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                """, (
                    timestamp, level.upper(), source, message, details,
                    ip_address, request_path
                ))
                conn.commit()

        except Exception as e:
            # Fallback to console logging if database fails
            print(f"[{timestamp}] [{level.upper()}] [{source}] {message}")
            if details:
                print(f"Details: {details}")
            print(f"Logging service error: {e}")

    @staticmethod
    def debug(source, message, details=None):
        LoggingService.log('DEBUG', source, message, details)

    @staticmethod
    def info(source, message, details=None):
        LoggingService.log('INFO', source, message, details)

    @staticmethod
    def warning(source, message, details=None):
        LoggingService.log('WARNING', source, message, details)

    @staticmethod
    def error(source, message, details=None):
        LoggingService.log('ERROR', source, message, details)

    @staticmethod
    def critical(source, message, details=None):
        LoggingService.log('CRITICAL', source, message, details)

    @staticmethod
    def log_api_call(source, endpoint, method='GET', status_code=200, details=None):
        """Log calls made to upstream APIs"""
        message = f"API {method} {endpoint} - Status: {status_code}"
        level = 'INFO' if 200 <= status_code < 400 else 'WARNING' if status_code < 500 else 'ERROR'
        LoggingService.log(level, source, message, details)

    @staticmethod
    def log_error_with_traceback(source, error, details=None):
        """Log error with full traceback"""
        error_details = {
            'error_type': type(error).__name__,
            'error_message': str(error),
            'traceback': traceback.format_exc()
        }
        if details:
            error_details['additional_details'] = details

        LoggingService.error(source, f"Exception occurred: {type(error).__name__}", error_details)

    @staticmethod
    def log_security_event(message, details=None):
        """Log security-related events (rejected admin credentials)"""
        LoggingService.warning('security', message, details)

    @staticmethod
    def recent(limit=50, source=None):
        """Return the most recent log entries as dicts, newest first"""
        query = "SELECT timestamp, level, source, message, details FROM app_logs"
        params = []
        if source:
            query += " WHERE source = ?"
            params.append(source)
        query += " ORDER BY id DESC LIMIT ?"
        params.append(limit)

        with Database.connect(LoggingService._log_db()) as conn:
            LoggingService._ensure_logs_table(conn)
            rows = conn.execute(query, params).fetchall()

        return [
            {'timestamp': r[0], 'level': r[1], 'source': r[2], 'message': r[3], 'details': r[4]}
            for r in rows
        ]


# Convenience instance for easy importing
logger = LoggingService()
