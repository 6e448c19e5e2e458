import re

# e.g. "com.example.Worker.run(Worker.java:42)" or "java.lang.Thread.sleep(java.base@17.0.2/Native Method)"
FRAME_NAME_REGEX = re.compile(r"^([^(]+)\(([^()]*)\)$")
FILE_AND_LINE_SEPARATOR = ":"
MODULE_SEPARATOR = "/"


class Frame:

    __slots__ = ("name", "package_name", "class_name", "method_name", "file_name", "line_no")

    def __init__(self, name, package_name=None, class_name=None, method_name=None, file_name=None, line_no=None):
        self.name = name
        self.package_name = package_name
        self.class_name = class_name
        self.method_name = method_name
        self.file_name = file_name
        self.line_no = line_no

    @classmethod
    def from_name(cls, name):
        """
        Splits a jstack frame descriptor into its components. The qualified method is split on "." (the last part is
        the method, the one before is the class and the rest is the package) and the parenthesized part is split
        on ":" into file name and line number.

        This never raises: any component that cannot be extracted is left as None, e.g. for "root" every
        component is None and for "java.lang.Object.wait(Native Method)" only the line number is None.
        """
        match = FRAME_NAME_REGEX.match(name)
        if match is None:
            return cls(name)
        qualified_method, source = match.groups()
        parts = qualified_method.strip().split(".")

        method_name = parts[-1] or None
        class_name = parts[-2] if len(parts) >= 2 else None
        package_name = ".".join(parts[:-2]) or None

        file_name, line_no = cls._parse_source(source)
        return cls(name, package_name=package_name, class_name=class_name, method_name=method_name,
                   file_name=file_name, line_no=line_no)

    @staticmethod
    def _parse_source(source):
        # jdk 9+ prints the module before the file, e.g. "java.base@17.0.2/Thread.java:833"
        source = source.rsplit(MODULE_SEPARATOR, 1)[-1]
        if not source:
            return None, None
        file_and_line = source.split(FILE_AND_LINE_SEPARATOR)
        file_name = file_and_line[0] or None
        line_no = None
        if len(file_and_line) > 1:
            try:
                line_no = int(file_and_line[1])
            except ValueError:
                line_no = None
        return file_name, line_no

    def __repr__(self):
        return "Frame(name={!r}, package_name={!r}, class_name={!r}, method_name={!r}, file_name={!r}, " \
               "line_no={!r})".format(self.name, self.package_name, self.class_name, self.method_name,
                                      self.file_name, self.line_no)
