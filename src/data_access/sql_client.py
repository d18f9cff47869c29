import pymssql
from typing import List, Optional
from src.config.settings import Settings
from src.models.errors import NotFoundError
from src.models.schemas import AttendanceRecord

class SQLClient:
    """SQL Server client for the employee directory and attendance records."""

    def __init__(self, config: Settings):
        self.config = config
        self.conn = None

    def connect(self) -> None:
        """Establish database connection."""
        self.conn = pymssql.connect(
            server=self.config.sql_server_host,
            port=self.config.sql_server_port,
            user=self.config.sql_server_username,
            password=self.config.sql_server_password,
            database=self.config.sql_server_database
        )

    def close(self) -> None:
        """Close database connection."""
        if self.conn:
            self.conn.close()
            self.conn = None

    def get_feedback_sheet_url(self, employee_id: str) -> Optional[str]:
        """
        Look up the feedback sheet registered for an employee.

        Returns:
            The sheet URL, or None when the employee has none configured

        Raises:
            NotFoundError: If the employee does not exist
        """
        if not self.conn:
            self.connect()

        query = """
            SELECT feedback_sheet_url
            FROM standup.employees
            WHERE employee_id = %s
        """

        with self.conn.cursor(as_dict=True) as cursor:
            cursor.execute(query, (employee_id,))
            row = cursor.fetchone()

        if row is None:
            raise NotFoundError("Employee not found.")

        url = row.get('feedback_sheet_url')
        return url.strip() if url and url.strip() else None

    def get_attendance_records(self, employee_id: str) -> List[AttendanceRecord]:
        """
        Retrieve attendance entries for an employee, newest first.
        """
        if not self.conn:
            self.connect()

        query = """
            SELECT scheduled_at, status
            FROM standup.attendance
            WHERE employee_id = %s
            ORDER BY scheduled_at DESC
        """

        with self.conn.cursor(as_dict=True) as cursor:
            cursor.execute(query, (employee_id,))
            rows = cursor.fetchall()

            return [
                AttendanceRecord(
                    scheduled_at=row['scheduled_at'],
                    status=row['status']
                )
                for row in rows
            ]
