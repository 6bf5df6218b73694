"""PHP exporter producing a generated autoload.php file."""

from classmap.model import ClassMap, GLOBAL_VARIABLE


ENTRY_FORMAT = "{} => __DIR__ . {},"


def to_php(class_map: ClassMap, command_name: str = "AutoloadGenerator") -> str:
    """
    Generate a PHP file setting up autoload information.

    A line is generated for each class rather than exporting the whole
    array, so that __DIR__ can be prepended to every path.

    Args:
        class_map: The class map to export.
        command_name: Command name to include in the file comment, directing
                      developers towards the way to regenerate the file.

    Returns:
        Contents of the autoload.php file.
    """
    content = [
        ENTRY_FORMAT.format(php_string(fqcn), php_string(path))
        for fqcn, path in class_map.entries().items()
    ]

    # Extensions using this generator append to the existing autoload
    variable = class_map.variable_name
    op = "+=" if variable == GLOBAL_VARIABLE else "="

    output = "\n\t".join(content)
    return (
        "<?php\n"
        f"// This file is generated by {command_name}, do not adjust manually\n"
        "// @codingStandardsIgnoreFile\n"
        f"global ${variable};\n"
        "\n"
        f"${variable} {op} [\n"
        f"\t{output}\n"
        "];\n"
    )


def php_string(value: str) -> str:
    """Quote a string as a single-quoted PHP literal."""
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"
