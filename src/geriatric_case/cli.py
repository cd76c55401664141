#!/usr/bin/env python3
# ============================================================================
# src/geriatric_case/cli.py
# ============================================================================
"""
Geriatric Case Command Line

Imports a clinical document, pulls out the case fields and either prints
them, renders the reviewer prompt, or exports the case.

Usage:
    geriatric-case extract note.pdf
    geriatric-case extract note.docx --json
    geriatric-case prompt note.txt --allow-raw
    geriatric-case export note.pptx --format doc --initials AB --ai-response plan.txt
"""

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from .config import logging_settings
from .core import (
    CaseExport,
    PromptRequest,
    extract_clinical_data,
    generate_prompt,
    validate_prompt_data,
)
from .core.prompt_builder import PLACEHOLDER_PATTERN
from .exporters import DocExporter, PPTExporter
from .extractors import FileHandler
from .utils import (
    ConfigurationError,
    GeriatricCaseError,
    format_medical_text,
    format_medication_list,
    setup_logging,
)


def _read_text(path: Optional[str]) -> Optional[str]:
    if not path:
        return None
    return Path(path).read_text(encoding='utf-8-sig')


def _read_template(path: Optional[str]) -> Optional[str]:
    try:
        template = _read_text(path)
    except OSError as e:
        raise ConfigurationError(f"Cannot read prompt template {path}: {e}") from e
    if template is not None and not PLACEHOLDER_PATTERN.search(template):
        raise ConfigurationError(
            f"Prompt template {path} has none of {{ageSex}}, {{hpi}}, {{meds}}"
        )
    return template


def cmd_extract(args, handler: FileHandler) -> int:
    text = handler.handle_file(args.file)
    record = extract_clinical_data(text)

    if args.json:
        print(json.dumps(record.to_dict(), indent=2))
        return 0

    if args.tidy:
        record = replace(
            record,
            hpi=format_medical_text(record.hpi) or record.hpi,
            meds=format_medication_list(record.meds) or record.meds,
        )

    for label, value in (
        ('ID', record.age_sex),
        ('HPI', record.hpi),
        ('MEDS', record.meds),
        ('LABS', record.labs),
    ):
        print(f"{label}: {value if value is not None else '(not found)'}")
    return 0


def cmd_prompt(args, handler: FileHandler) -> int:
    text = handler.handle_file(args.file)
    request = PromptRequest.from_record(
        extract_clinical_data(text),
        raw_text=text,
        template=_read_template(args.template),
    )

    validation = validate_prompt_data(request, allow_bypass=args.allow_raw)
    if not validation.is_valid:
        print(validation.message, file=sys.stderr)
        return 1

    if validation.using_raw_text:
        print(validation.message, file=sys.stderr)
    print(generate_prompt(request))
    return 0


def cmd_export(args, handler: FileHandler) -> int:
    text = handler.handle_file(args.file)
    record = extract_clinical_data(text)
    case = CaseExport.from_data({
        'age_sex': record.age_sex,
        'initials': args.initials,
        'hpi': record.hpi,
        'meds': record.meds,
        'ai_response': _read_text(args.ai_response),
    })

    if args.format == 'pptx':
        output = PPTExporter().export(case, args.output)
    else:
        export = DocExporter().export(case)
        if args.output:
            output = Path(args.output)
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_bytes(export.content)
        else:
            output = export.save('.')

    print(f"Saved {output}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='geriatric-case',
        description="Extract geriatric case fields, build review prompts and export cases"
    )
    parser.add_argument("--log-level", default=logging_settings.LOG_LEVEL,
                        help="Logging level (default: %(default)s)")
    parser.add_argument("--log-file", type=Path, default=logging_settings.LOG_FILE,
                        help="Also write logs to this file")
    parser.add_argument("--log-json", action="store_true", default=logging_settings.LOG_JSON,
                        help="Emit JSON log lines")

    subparsers = parser.add_subparsers(dest="command", required=True)

    extract = subparsers.add_parser("extract", help="Print the fields found in a document")
    extract.add_argument("file", help="Clinical document (pptx, pdf, docx, html, txt, image)")
    extract.add_argument("--json", action="store_true", help="Print the record as JSON")
    extract.add_argument("--tidy", action="store_true",
                         help="Re-flow HPI and put one medication per line")
    extract.set_defaults(func=cmd_extract)

    prompt = subparsers.add_parser("prompt", help="Print the AI reviewer prompt for a document")
    prompt.add_argument("file", help="Clinical document")
    prompt.add_argument("--allow-raw", action="store_true",
                        help="Fall back to the raw text when no field was found")
    prompt.add_argument("--template", help="Custom prompt template file")
    prompt.set_defaults(func=cmd_prompt)

    export = subparsers.add_parser("export", help="Export a case as PowerPoint or Word")
    export.add_argument("file", help="Clinical document")
    export.add_argument("--format", choices=["pptx", "doc"], required=True)
    export.add_argument("--initials", default="", help="Patient initials")
    export.add_argument("--ai-response", help="File holding the AI response")
    export.add_argument("--output", "-o", help="Output file (default: Case_<initials>.<format>)")
    export.set_defaults(func=cmd_export)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, args.log_file, args.log_json)

    try:
        return args.func(args, FileHandler())
    except (GeriatricCaseError, OSError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
