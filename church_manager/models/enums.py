from enum import Enum


class MemberStatus(Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    VISITOR = "Visitor"


class MemberRole(Enum):
    MEMBER = "Member"
    DEACON = "Deacon"
    PASTOR = "Pastor"
    EVANGELIST = "Evangelist"
