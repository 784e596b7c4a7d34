"""
Code Stopper Language Module

The closed set of language tags understood by the validator, plus the
language list the editor exposes to users.
"""

from typing import Dict, List, Optional
from dataclasses import dataclass
from enum import Enum


class Language(str, Enum):
    """Language tags the validator has rule sets for"""
    PYTHON = "python"
    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    JAVA = "java"
    CPP = "cpp"
    C = "c"
    GO = "go"
    RUST = "rust"

    @classmethod
    def parse(cls, value) -> Optional["Language"]:
        """Coerce a tag or its string value, None if unrecognized"""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                return None
        return None


@dataclass(frozen=True)
class LanguageConfig:
    """A language entry as shown in the editor's language picker"""
    id: Language
    name: str
    extension: str
    editor_mode: str
    icon: str
    default_code: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "id": self.id.value,
            "name": self.name,
            "extension": self.extension,
            "editor_mode": self.editor_mode,
            "icon": self.icon,
            "default_code": self.default_code,
        }


# Go and Rust have rule sets but are not offered in the picker.
EDITOR_LANGUAGES: List[LanguageConfig] = [
    LanguageConfig(
        id=Language.PYTHON,
        name="Python",
        extension=".py",
        editor_mode="python",
        icon="🐍",
        default_code=(
            "# Python 3\n"
            "def main():\n"
            "    print(\"Hello, World!\")\n"
            "\n"
            "if __name__ == \"__main__\":\n"
            "    main()\n"
        ),
    ),
    LanguageConfig(
        id=Language.JAVASCRIPT,
        name="JavaScript",
        extension=".js",
        editor_mode="javascript",
        icon="📜",
        default_code=(
            "// JavaScript (Node.js)\n"
            "function main() {\n"
            "  console.log(\"Hello, World!\");\n"
            "}\n"
            "\n"
            "main();\n"
        ),
    ),
    LanguageConfig(
        id=Language.TYPESCRIPT,
        name="TypeScript",
        extension=".ts",
        editor_mode="typescript",
        icon="💠",
        default_code=(
            "// TypeScript\n"
            "function greet(name: string): void {\n"
            "  console.log(`Hello, ${name}!`);\n"
            "}\n"
            "\n"
            "greet(\"World\");\n"
        ),
    ),
    LanguageConfig(
        id=Language.JAVA,
        name="Java",
        extension=".java",
        editor_mode="java",
        icon="☕",
        default_code=(
            "// Java\n"
            "public class Main {\n"
            "    public static void main(String[] args) {\n"
            "        System.out.println(\"Hello, World!\");\n"
            "    }\n"
            "}\n"
        ),
    ),
    LanguageConfig(
        id=Language.CPP,
        name="C++",
        extension=".cpp",
        editor_mode="cpp",
        icon="⚡",
        default_code=(
            "// C++\n"
            "#include <iostream>\n"
            "\n"
            "int main() {\n"
            "    std::cout << \"Hello, World!\" << std::endl;\n"
            "    return 0;\n"
            "}\n"
        ),
    ),
    LanguageConfig(
        id=Language.C,
        name="C",
        extension=".c",
        editor_mode="c",
        icon="🔧",
        default_code=(
            "// C\n"
            "#include <stdio.h>\n"
            "\n"
            "int main() {\n"
            "    printf(\"Hello, World!\\n\");\n"
            "    return 0;\n"
            "}\n"
        ),
    ),
]


def get_language_by_id(language_id: str) -> Optional[LanguageConfig]:
    """Find an editor language by its tag"""
    for config in EDITOR_LANGUAGES:
        if config.id.value == language_id:
            return config
    return None


def get_language_by_extension(extension: str) -> Optional[LanguageConfig]:
    """Find an editor language by file extension (with the dot)"""
    for config in EDITOR_LANGUAGES:
        if config.extension == extension:
            return config
    return None
