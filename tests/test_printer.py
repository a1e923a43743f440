"""Tests for printer.py — rendering syntax trees."""

from javadecl import tsast
from javadecl.printer import print_class, print_source, print_type


class TestPrintType:
    def test_union_in_array(self):
        node = tsast.ArrayType(tsast.union(tsast.NUMBER, tsast.NULL))
        assert print_type(node) == "(number | null)[]"

    def test_single_member_union_collapses(self):
        assert tsast.union(tsast.STRING) == tsast.STRING

    def test_type_arguments(self):
        node = tsast.promise(tsast.union(tsast.TypeReference("Foo"), tsast.NULL))
        assert print_type(node) == "Promise<Foo | null>"


class TestPrintClass:
    def test_members_and_comments(self):
        node = tsast.ClassDeclaration(
            modifiers=("export", "declare"),
            name="FooClass",
            extends=tsast.Identifier("JavaClass"),
            members=(
                tsast.Property(
                    ("public", "readonly"),
                    "x",
                    tsast.NUMBER,
                    comments=(tsast.LineComment(" x"), tsast.DocComment(("a", "", "b"))),
                ),
                tsast.Method(
                    ("public",),
                    "get",
                    (tsast.Parameter("var0", tsast.STRING),),
                    tsast.VOID,
                ),
                tsast.Constructor(("public",)),
            ),
        )
        assert print_class(node) == (
            "export declare class FooClass extends JavaClass {\n"
            "    // x\n"
            "    /**\n"
            "     * a\n"
            "     *\n"
            "     * b\n"
            "     */\n"
            "    public readonly x: number;\n"
            "    public get(var0: string): void;\n"
            "    public constructor();\n"
            "}"
        )

    def test_constructor_with_body(self):
        node = tsast.ClassDeclaration(
            modifiers=("export",),
            name="Foo",
            extends=tsast.ImportClassCall("FooClass", "a.Foo"),
            members=(tsast.Constructor(("private",), body=(tsast.SuperCall(),)),),
        )
        assert print_class(node) == (
            'export class Foo extends importClass<typeof FooClass>("a.Foo") {\n'
            "    private constructor() {\n"
            "        super();\n"
            "    }\n"
            "}"
        )


def test_print_source():
    source = tsast.SourceFile(
        (
            tsast.ImportDeclaration(
                (tsast.ImportSpecifier("importClass"), tsast.ImportSpecifier("B", "a_B")),
                "java-bridge",
            ),
            tsast.BlankLine(),
            tsast.ExportDefault("Foo"),
        )
    )
    assert print_source(source) == (
        'import { importClass, B as a_B } from "java-bridge";\n'
        "\n"
        "export default Foo;\n"
    )
