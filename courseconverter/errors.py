"""
Converter Exceptions

Structural failures propagate out of the pipeline and abort one course.
Component failures are caught where the component is rendered.
"""


class CourseConverterError(Exception):
    """Base class for all converter errors"""


class CourseNotFoundError(CourseConverterError, FileNotFoundError):
    """No course.xml at the course root"""


class MalformedXmlError(CourseConverterError, ValueError):
    """An XML file could not be parsed"""

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"Malformed XML in {path}: {reason}")


class ComponentError(CourseConverterError):
    """A leaf component could not be parsed"""


class MissingComponentFileError(ComponentError, FileNotFoundError):
    """A component's backing file is absent"""


class MalformedComponentError(ComponentError, ValueError):
    """A component's XML is unreadable or has an unexpected root element"""


class ArchiveError(CourseConverterError):
    """A course archive could not be located or extracted"""
