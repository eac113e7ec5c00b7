"""
Report Generation Service using Jinja2 templates.

Architecture Decision: Template Pattern
The export layout lives in a template file instead of string concatenation
in code, so the fixed-width report can be tweaked without touching Python.
"""

import datetime
from pathlib import Path
from typing import Optional, Sequence
from jinja2 import Environment, FileSystemLoader

from worktime.domain.models import TaskTimerEntity
from worktime.utils import get_resource_path, format_duration


class ReportService:
    """
    Renders the plain-text task export.
    """

    EXPORT_TEMPLATE = "export_report.txt"
    EXPORT_PREFIX = "time_tracking_"
    EXPORT_EXTENSION = ".txt"

    def __init__(self, template_dir: Optional[Path] = None):
        """
        Initialize the report service.

        Args:
            template_dir: Directory containing Jinja2 templates
        """
        if template_dir is None:
            template_dir = get_resource_path("worktime/resources/templates")

        self.template_dir = template_dir

        # Setup Jinja2 environment
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True
        )

        # Add custom filters
        self.env.filters['format_duration'] = format_duration
        self.env.filters['format_date'] = self._format_date

    @staticmethod
    def _format_date(dt: datetime.datetime, fmt: str = "%Y-%m-%d %H:%M:%S") -> str:
        """Format datetime object"""
        return dt.strftime(fmt)

    def generate_export_filename(self, now: Optional[datetime.datetime] = None) -> str:
        """Generate a timestamped export filename"""
        timestamp = (now or datetime.datetime.now()).strftime("%Y%m%d_%H%M%S")
        return f"{self.EXPORT_PREFIX}{timestamp}{self.EXPORT_EXTENSION}"

    def render_export(self, tasks: Sequence[TaskTimerEntity],
                      generated_at: Optional[datetime.datetime] = None) -> str:
        """
        Render the fixed-width export report.

        Args:
            tasks: Tasks in display order
            generated_at: Timestamp for the header, defaults to now

        Returns:
            The report text
        """
        context = {
            'tasks': list(tasks),
            'total_seconds': sum(t.elapsed_seconds for t in tasks),
            'generated_at': generated_at or datetime.datetime.now(),
        }
        template = self.env.get_template(self.EXPORT_TEMPLATE)
        return template.render(**context)
