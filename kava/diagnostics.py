"""
Diagnostic formatting and reporting for the Kava Programming Language
Provides pretty-printed error messages with code frames and ANSI colors
"""

import sys
import os
from enum import Enum
from typing import List, Optional, TextIO

from kava.errors import Diagnostic, LabeledSpan, Severity
from kava.source_map import Source


class ColorMode(Enum):
    """Color output modes"""
    NEVER = "never"
    ALWAYS = "always"
    AUTO = "auto"


COLORS = {
    'reset': '\033[0m',
    'bold': '\033[1m',
    'white': '\033[37m',
    'bright_red': '\033[91m',
    'bright_yellow': '\033[93m',
    'bright_blue': '\033[94m',
    'bright_cyan': '\033[96m',
}

SEVERITY_COLORS = {
    Severity.ERROR: 'bright_red',
    Severity.WARNING: 'bright_yellow',
    Severity.NOTE: 'bright_blue',
    Severity.HELP: 'bright_cyan',
}


class DiagnosticFormatter:
    """Formats diagnostics for human-readable output"""

    def __init__(self, color_mode: ColorMode = ColorMode.AUTO, max_errors: int = 20):
        self.color_mode = color_mode
        self.max_errors = max_errors
        self.error_count = 0
        self.warning_count = 0

    def should_use_colors(self, file: TextIO = sys.stderr) -> bool:
        """Determine if we should use ANSI colors"""
        if self.color_mode == ColorMode.NEVER:
            return False
        elif self.color_mode == ColorMode.ALWAYS:
            return True
        else:  # AUTO
            isatty = getattr(file, 'isatty', None)
            return bool(isatty and isatty()) and os.getenv('NO_COLOR') is None

    def colorize(self, text: str, color: str, file: TextIO = sys.stderr) -> str:
        """Apply color to text if colors are enabled"""
        if not self.should_use_colors(file):
            return text
        return f"{COLORS.get(color, '')}{text}{COLORS['reset']}"

    def format_diagnostic(self, diagnostic: Diagnostic, file: TextIO = sys.stderr) -> str:
        """Format a single diagnostic with code frame"""
        if diagnostic.severity == Severity.ERROR:
            self.error_count += 1
        elif diagnostic.severity == Severity.WARNING:
            self.warning_count += 1

        if self.error_count > self.max_errors:
            return self.colorize("... (too many errors, stopping)\n", 'bright_red', file)

        severity_color = SEVERITY_COLORS.get(diagnostic.severity, 'white')
        header = f"{diagnostic.severity.value.title()} [{diagnostic.code}]: {diagnostic.message}"
        output_lines = [self.colorize(header, severity_color, file)]

        primary_span = diagnostic.primary_span()
        if primary_span is not None:
            start_pos, _ = primary_span.positions()
            location = f"  --> {primary_span.source.uri}:{start_pos}"
            output_lines.append(self.colorize(location, 'bright_blue', file))
            output_lines.append(self.colorize("   |", 'bright_blue', file))
            output_lines.extend(self._format_code_frame(diagnostic, primary_span.source, file))

        if diagnostic.help:
            output_lines.append(self.colorize(f"   = help: {diagnostic.help}", 'bright_cyan', file))

        for note in diagnostic.notes:
            output_lines.append(self.colorize(f"   = note: {note}", 'bright_blue', file))

        output_lines.append("")  # Empty line after diagnostic
        return "\n".join(output_lines)

    def _format_code_frame(self, diagnostic: Diagnostic, source: Source, file: TextIO) -> List[str]:
        """Format the code frame with line numbers and labels"""
        span_info = []
        for label in diagnostic.labels:
            if label.span.source != source:
                continue
            start_pos, end_pos = label.span.positions()
            span_info.append((label, start_pos, end_pos))

        if not span_info:
            return []

        # One line of context on either side of the labelled lines
        all_lines = [info[1].line for info in span_info] + [info[2].line for info in span_info]
        min_line = max(1, min(all_lines) - 1)
        max_line = min(source.line_count(), max(all_lines) + 1)
        gutter_width = len(str(max_line))

        lines = []
        line_start = 0
        for line_num in range(1, max_line + 1):
            line_end = source.text.find('\n', line_start)
            if line_end == -1:
                line_end = len(source.text)
            if line_num >= min_line:
                line_content = source.text[line_start:line_end]
                line_labels = [info for info in span_info if info[1].line <= line_num <= info[2].line]
                lines.append(self._format_line(line_num, line_content, line_labels, gutter_width, file))
            line_start = line_end + 1

        return lines

    def _format_line(self, line_num: int, line_content: str, line_labels: List,
                     gutter_width: int, file: TextIO) -> str:
        """Format a source line and underline any labelled spans on it"""
        pipe = self.colorize('|', 'bright_blue', file)
        gutter = self.colorize(f"{line_num:>{gutter_width}}", 'bright_blue', file)
        output_lines = [f"{gutter} {pipe} {line_content}".rstrip()]

        underline_chars = [' '] * (len(line_content) + 1)
        label_positions = []
        for label, start_pos, end_pos in line_labels:
            start_col = start_pos.column - 1 if start_pos.line == line_num else 0
            end_col = end_pos.column if end_pos.line == line_num else len(line_content)
            underline_char = '^' if label.is_primary else '-'
            for i in range(start_col, max(start_col + 1, end_col)):
                if i < len(underline_chars):
                    underline_chars[i] = underline_char
            if label.label and start_pos.line == line_num:
                label_positions.append((label, end_col))

        underline = ''.join(underline_chars).rstrip()
        if not underline:
            return output_lines[0]

        suffix = ""
        if label_positions:
            primary_labels = [label for label, _ in label_positions if label.is_primary]
            chosen = primary_labels[0] if primary_labels else label_positions[0][0]
            suffix = " " + self._colorize_label(chosen, file)
        output_lines.append(f"{' ' * gutter_width} {pipe} {self._colorize_underline(underline, file)}{suffix}")
        return "\n".join(output_lines)

    def _colorize_label(self, label: LabeledSpan, file: TextIO) -> str:
        return self.colorize(label.label, 'bright_red' if label.is_primary else 'bright_yellow', file)

    def _colorize_underline(self, underline: str, file: TextIO) -> str:
        """Color underline characters appropriately"""
        result = []
        for char in underline:
            if char == '^':
                result.append(self.colorize(char, 'bright_red', file))
            elif char == '-':
                result.append(self.colorize(char, 'bright_yellow', file))
            else:
                result.append(char)
        return ''.join(result)

    def emit_diagnostic(self, diagnostic: Diagnostic, file: Optional[TextIO] = None):
        """Emit a diagnostic to the given file"""
        file = file or sys.stderr
        file.write(self.format_diagnostic(diagnostic, file))
        file.flush()

    def print_summary(self, file: Optional[TextIO] = None):
        """Print error/warning summary"""
        file = file or sys.stderr
        if self.error_count == 0 and self.warning_count == 0:
            return

        parts = []
        if self.error_count > 0:
            error_text = f"{self.error_count} error{'s' if self.error_count != 1 else ''}"
            parts.append(self.colorize(error_text, 'bright_red', file))

        if self.warning_count > 0:
            warning_text = f"{self.warning_count} warning{'s' if self.warning_count != 1 else ''}"
            parts.append(self.colorize(warning_text, 'bright_yellow', file))

        summary = ", ".join(parts) + " generated"
        file.write(f"\n{summary}\n")
        file.flush()


# Global formatter instance
_formatter = DiagnosticFormatter()


def get_formatter() -> DiagnosticFormatter:
    """Get the global diagnostic formatter"""
    return _formatter


def reset_formatter():
    """Reset the global formatter (useful for testing)"""
    global _formatter
    _formatter = DiagnosticFormatter()


def emit_diagnostic(diagnostic: Diagnostic, file: Optional[TextIO] = None):
    """Emit a diagnostic using the global formatter"""
    _formatter.emit_diagnostic(diagnostic, file)


def set_color_mode(mode: ColorMode):
    """Set the global color mode"""
    _formatter.color_mode = mode


def set_max_errors(max_errors: int):
    """Set the maximum number of errors to show"""
    _formatter.max_errors = max_errors
