"""Operation selectors with an explicit fallback arm."""

from enum import Enum


class _TaggedSelector(str, Enum):

    @classmethod
    def from_tag(cls, tag):
        """Resolve a case-sensitive tag; anything unrecognized maps to UNKNOWN."""
        if isinstance(tag, cls):
            return tag
        for member in cls:
            if member is not cls.UNKNOWN and member.value == tag:
                return member
        return cls.UNKNOWN


class FrequencyFilterType(_TaggedSelector):
    LOWPASS = 'lowpass'
    HIGHPASS = 'highpass'
    BANDPASS = 'bandpass'
    UNKNOWN = ''


class ProjectionType(_TaggedSelector):
    HORIZONTAL = 'horizontal'
    VERTICAL = 'vertical'
    RADIAL = 'radial'
    ANGULAR = 'angular'
    ISOMETRIC = 'isometric'
    UNKNOWN = ''
