"""Class map data model: which file each detected class is autoloaded from."""

from typing import Dict, Iterator, List, Tuple


GLOBAL_VARIABLE = "wgAutoloadClasses"
LOCAL_VARIABLE = "wgAutoloadLocalClasses"


class ClassMap:
    """
    Classes detected in a project, keyed by the file that declares them.

    Paths are stored relative to the basepath with a leading "/", e.g.
    "/includes/Title.php". Overrides force a class to be loaded from a
    specific file regardless of where, or if, it was detected.
    """

    def __init__(self, basepath: str, local: bool = False):
        self._basepath = basepath
        self._classes: Dict[str, List[str]] = {}  # short path -> FQCNs
        self._overrides: Dict[str, str] = {}  # FQCN -> short path
        self._variable_name = LOCAL_VARIABLE if local else GLOBAL_VARIABLE

    @property
    def basepath(self) -> str:
        """Root path of the project being scanned for classes."""
        return self._basepath

    @property
    def variable_name(self) -> str:
        """Name of the PHP global the generated autoload file assigns."""
        return self._variable_name

    @property
    def classes(self) -> Dict[str, List[str]]:
        """Return detected classes (short path -> list of FQCN)."""
        return {k: list(v) for k, v in self._classes.items()}

    @property
    def overrides(self) -> Dict[str, str]:
        """Return forced class locations (FQCN -> short path)."""
        return dict(self._overrides)

    def add_file(self, shortpath: str, classes: List[str]) -> None:
        """
        Record the classes declared in a file.

        Reading the same file again replaces its earlier result.
        """
        self._classes[shortpath] = list(classes)

    def add_override(self, fqcn: str, shortpath: str) -> None:
        """Force fqcn to be autoloaded from shortpath."""
        self._overrides[fqcn] = shortpath

    def get_classes(self, shortpath: str) -> List[str]:
        """Get the classes detected in a file."""
        return list(self._classes.get(shortpath, []))

    def iter_detected(self) -> Iterator[Tuple[str, str]]:
        """Iterate over detected classes as (fqcn, shortpath) tuples."""
        for shortpath, contained in self._classes.items():
            for fqcn in contained:
                yield fqcn, shortpath

    def entries(self) -> Dict[str, str]:
        """
        Get the final FQCN -> short path mapping.

        Overrides win over detections, and later detections of the same
        name win over earlier ones.

        Returns:
            Mapping sorted by FQCN.
        """
        merged: Dict[str, str] = dict(self.iter_detected())
        merged.update(self._overrides)
        return {fqcn: merged[fqcn] for fqcn in sorted(merged)}

    def __len__(self) -> int:
        """Return the number of distinct autoloadable names."""
        return len(self.entries())

    def __contains__(self, fqcn: str) -> bool:
        """Check if a class name is autoloadable."""
        return fqcn in self._overrides or any(
            fqcn in contained for contained in self._classes.values()
        )

    def __repr__(self) -> str:
        detected = sum(len(c) for c in self._classes.values())
        return f"ClassMap(basepath={self._basepath!r}, files={len(self._classes)}, classes={detected}, overrides={len(self._overrides)})"
