from enum import StrEnum


class EventCategory(StrEnum):
    MUSIC = 'Music'
    SPORTS = 'Sports'
    ART = 'Art'
    THEATER = 'Theater'
    SEMINAR = 'Seminar'
    CULTURAL = 'Cultural'
    TALK = 'Talk'
