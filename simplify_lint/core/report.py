"""Emitting diagnostics and reporting findings."""

import json
import logging
import sys
from collections import defaultdict
from typing import Callable, List, TextIO

from simplify_lint import __version__
from simplify_lint.core.finding import Diagnostic, Finding

logger = logging.getLogger(__name__)


class Emitter:
    """
    Hands formatted diagnostics to the host's warning sink.

    The sink receives the message string only; attaching the source location
    is up to the host.
    """

    def __init__(self, sink: Callable[[str], None]):
        self.sink = sink

    def emit(self, diagnostic: Diagnostic) -> None:
        """Format a diagnostic and pass it to the sink."""
        message = diagnostic.message
        logger.debug("Emitting %s: %s", diagnostic.rule, message)
        self.sink(message)


class Reporter:
    """Formats and outputs findings in various formats."""

    def __init__(self, output_format: str = "text"):
        self.output_format = output_format

    def report(self, findings: List[Finding], output: TextIO = sys.stdout) -> int:
        """
        Output findings in the configured format.

        Returns:
            Exit code (0 if nothing can be simplified, 1 otherwise)
        """
        if self.output_format == "json":
            self._report_json(findings, output)
        elif self.output_format == "sarif":
            self._report_sarif(findings, output)
        else:
            self._report_text(findings, output)

        return 1 if findings else 0

    def _report_text(self, findings: List[Finding], output: TextIO):
        """Report findings in human-readable text format."""
        if not findings:
            output.write("No simplifications found.\n")
            return

        by_source = defaultdict(list)
        for finding in findings:
            by_source[finding.source].append(finding)

        for source in sorted(by_source.keys()):
            for finding in sorted(by_source[source], key=lambda f: f.line):
                output.write(str(finding))
                output.write("\n")
                if finding.context:
                    output.write(f"    In: {finding.context}\n")

        output.write("\n")
        self._write_summary(findings, output)

    def _write_summary(self, findings: List[Finding], output: TextIO):
        """Write summary of findings."""
        sources = {finding.source for finding in findings}
        total = len(findings)
        output.write(
            f"{total} simplification{'s' if total != 1 else ''} found"
            f" in {len(sources)} file{'s' if len(sources) != 1 else ''}\n"
        )

    def _report_json(self, findings: List[Finding], output: TextIO):
        """Report findings in JSON format."""
        data = {
            "findings": [f.to_dict() for f in findings],
            "summary": {"total": len(findings)},
        }
        json.dump(data, output, indent=2)
        output.write("\n")

    def _report_sarif(self, findings: List[Finding], output: TextIO):
        """
        Report findings in SARIF format.

        SARIF (Static Analysis Results Interchange Format) is a standard format
        for static analysis tools, supported by GitHub, VS Code, and other IDEs.
        """
        results = []
        for finding in findings:
            result = {
                "ruleId": finding.rule or finding.category,
                "level": "warning",
                "message": {"text": finding.message},
                "locations": [{
                    "physicalLocation": {
                        "artifactLocation": {"uri": finding.source},
                        "region": {"startLine": finding.line},
                    }
                }],
            }
            results.append(result)

        sarif = {
            "$schema": "https://raw.githubusercontent.com/oasis-tcs/sarif-spec/master/Schemata/sarif-schema-2.1.0.json",
            "version": "2.1.0",
            "runs": [{
                "tool": {"driver": {"name": "simplify_lint", "version": __version__}},
                "results": results,
            }],
        }

        json.dump(sarif, output, indent=2)
        output.write("\n")
