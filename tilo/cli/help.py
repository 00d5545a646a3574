from __future__ import annotations

from tilo.command.operations import Operation


def format_overview(operations: dict[str, Operation]) -> str:
    width = max(len(name) for name in operations)
    lines = ["Usage: tilo <operation> [args...]", "", "Operations:"]
    for op in operations.values():
        lines.append(f"  {op.name:<{width}}  {op.summary}")
    lines.append("")
    lines.append("Use 'tilo help <operation>' for details on an operation.")
    return "\n".join(lines)


def format_operation(op: Operation) -> str:
    lines = [op.summary, "", f"Usage: {op.usage()}"]

    params = op.parser.args.params
    if params:
        usages = [p.usage() for p in params]
        width = max(len(u) for u in usages)
        lines.append("")
        lines.append("Params:")
        for usage, param in zip(usages, params):
            lines.append(f"  {usage:<{width}}  {param.description}")

    if op.footer:
        lines.append("")
        lines.append(op.footer)

    return "\n".join(lines)
