"""Render :mod:`javadecl.tsast` trees to TypeScript source text."""

from __future__ import annotations

from javadecl import tsast

INDENT = "    "


def print_type(node: tsast.TypeNode) -> str:
    if isinstance(node, tsast.KeywordType):
        return node.keyword
    if isinstance(node, tsast.NullType):
        return "null"
    if isinstance(node, tsast.TypeReference):
        if node.type_arguments:
            args = ", ".join(print_type(a) for a in node.type_arguments)
            return f"{node.name}<{args}>"
        return node.name
    if isinstance(node, tsast.ArrayType):
        element = print_type(node.element)
        if isinstance(node.element, tsast.UnionType):
            element = f"({element})"
        return f"{element}[]"
    if isinstance(node, tsast.UnionType):
        return " | ".join(print_type(t) for t in node.types)
    raise TypeError(f"Not a type node: {node!r}")


def _print_comments(comments, indent: str) -> list[str]:
    lines: list[str] = []
    for comment in comments:
        if isinstance(comment, tsast.LineComment):
            lines.append(f"{indent}//{comment.text}")
        else:
            lines.append(f"{indent}/**")
            for text in comment.lines:
                lines.append(f"{indent} * {text}" if text else f"{indent} *")
            lines.append(f"{indent} */")
    return lines


def _print_parameters(parameters) -> str:
    return ", ".join(f"{p.name}: {print_type(p.type)}" for p in parameters)


def _modifier_prefix(modifiers) -> str:
    return "".join(f"{m} " for m in modifiers)


def _print_member(member: tsast.ClassMember, indent: str) -> list[str]:
    lines = _print_comments(member.comments, indent)
    prefix = indent + _modifier_prefix(member.modifiers)
    if isinstance(member, tsast.Property):
        lines.append(f"{prefix}{member.name}: {print_type(member.type)};")
    elif isinstance(member, tsast.Method):
        lines.append(
            f"{prefix}{member.name}({_print_parameters(member.parameters)})"
            f": {print_type(member.return_type)};"
        )
    elif isinstance(member, tsast.Constructor):
        signature = f"{prefix}constructor({_print_parameters(member.parameters)})"
        if member.body is None:
            lines.append(signature + ";")
        else:
            lines.append(signature + " {")
            for statement in member.body:
                if isinstance(statement, tsast.SuperCall):
                    lines.append(f"{indent}{INDENT}super();")
            lines.append(f"{indent}}}")
    else:
        raise TypeError(f"Not a class member: {member!r}")
    return lines


def _print_heritage(expression) -> str:
    if isinstance(expression, tsast.ImportClassCall):
        return f'importClass<typeof {expression.type_name}>("{expression.class_name}")'
    return expression.text


def print_class(node: tsast.ClassDeclaration) -> str:
    lines = _print_comments(node.comments, "")
    lines.append(
        f"{_modifier_prefix(node.modifiers)}class {node.name} "
        f"extends {_print_heritage(node.extends)} {{"
    )
    for member in node.members:
        lines.extend(_print_member(member, INDENT))
    lines.append("}")
    return "\n".join(lines)


def print_import(node: tsast.ImportDeclaration) -> str:
    names = ", ".join(
        f"{s.name} as {s.alias}" if s.alias else s.name for s in node.specifiers
    )
    return f'import {{ {names} }} from "{node.module}";'


def print_statement(node: tsast.Statement) -> str:
    if isinstance(node, tsast.ImportDeclaration):
        return print_import(node)
    if isinstance(node, tsast.ClassDeclaration):
        return print_class(node)
    if isinstance(node, tsast.ExportDefault):
        return f"export default {node.name};"
    if isinstance(node, tsast.BlankLine):
        return ""
    raise TypeError(f"Not a statement: {node!r}")


def print_source(source: tsast.SourceFile) -> str:
    """Render a whole module; the result ends with a newline."""
    return "\n".join(print_statement(s) for s in source.statements) + "\n"
