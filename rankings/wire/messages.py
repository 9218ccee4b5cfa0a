"""
Protobuf messages for the ``application/x-protobuf`` wire format.

The ``rankings.v1`` file descriptor is assembled here and registered in
the default descriptor pool, and message classes are obtained from it.
Field numbers follow the order fields are listed in ``SCHEMA`` and must
never be reordered once clients depend on them; append new fields only.
"""

from typing import Dict, List, Tuple

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

# Registers timestamp.proto and wrappers.proto in the default pool
from google.protobuf import timestamp_pb2, wrappers_pb2  # noqa: F401

PACKAGE = "rankings.v1"
FILE_NAME = "rankings/v1/rankings.proto"

_Field = descriptor_pb2.FieldDescriptorProto

_SCALAR_TYPES = {
    "int32": _Field.TYPE_INT32,
    "string": _Field.TYPE_STRING,
    "bool": _Field.TYPE_BOOL,
    "double": _Field.TYPE_DOUBLE,
}

_WELL_KNOWN_TYPES = {
    "StringValue": ".google.protobuf.StringValue",
    "Int32Value": ".google.protobuf.Int32Value",
    "Timestamp": ".google.protobuf.Timestamp",
}

# message name -> [(field name, "[repeated ]type")]
SCHEMA: Dict[str, List[Tuple[str, str]]] = {
    "Company": [
        ("id", "int32"),
        ("name", "string"),
        ("slug", "string"),
        ("logo_url", "StringValue"),
        ("description", "StringValue"),
        ("website", "StringValue"),
        ("category", "string"),
        ("tags", "repeated string"),
        ("founded_year", "Int32Value"),
        ("hq_location", "StringValue"),
        ("employee_range", "StringValue"),
        ("funding_stage", "StringValue"),
        ("elo_rating", "int32"),
        ("total_votes", "int32"),
        ("wins", "int32"),
        ("losses", "int32"),
        ("rank", "Int32Value"),
        ("created_at", "Timestamp"),
        ("updated_at", "Timestamp"),
    ],
    "CompanyList": [("companies", "repeated Company")],
    "MatchupPair": [("company1", "Company"), ("company2", "Company")],
    "VoteRequest": [
        ("winner_id", "int32"),
        ("loser_id", "int32"),
        ("session_id", "StringValue"),
    ],
    "VoteResponse": [
        ("winner", "Company"),
        ("loser", "Company"),
        ("winner_elo_diff", "int32"),
        ("loser_elo_diff", "int32"),
    ],
    "LeaderboardResponse": [
        ("companies", "repeated Company"),
        ("total_count", "int32"),
        ("page", "int32"),
        ("page_size", "int32"),
    ],
    "RatingRequest": [
        ("company_id", "int32"),
        ("criterion", "string"),
        ("score", "int32"),
        ("session_id", "StringValue"),
    ],
    "CompanyRating": [
        ("id", "int32"),
        ("company_id", "int32"),
        ("criterion", "string"),
        ("score", "int32"),
        ("session_id", "StringValue"),
        ("created_at", "Timestamp"),
    ],
    "AggregatedRating": [
        ("criterion", "string"),
        ("average_score", "double"),
        ("total_ratings", "int32"),
    ],
    "AggregatedRatingList": [("ratings", "repeated AggregatedRating")],
    "CommentRequest": [
        ("company_id", "int32"),
        ("content", "string"),
        ("is_current_employee", "bool"),
        ("session_id", "StringValue"),
    ],
    "CompanyComment": [
        ("id", "int32"),
        ("company_id", "int32"),
        ("content", "string"),
        ("is_current_employee", "bool"),
        ("session_id", "StringValue"),
        ("upvotes", "int32"),
        ("created_at", "Timestamp"),
    ],
    "CommentList": [("comments", "repeated CompanyComment")],
    "CategoryCount": [("category", "string"), ("count", "int32")],
    "CategoryCountList": [("categories", "repeated CategoryCount")],
    "StatsResponse": [
        ("total_companies", "int32"),
        ("total_votes", "int32"),
        ("total_ratings", "int32"),
        ("total_comments", "int32"),
        ("categories", "repeated string"),
    ],
    "UserLeaderboardEntry": [
        ("user_id", "string"),
        ("total_votes", "int32"),
        ("rank", "int32"),
    ],
    "UserLeaderboardResponse": [
        ("users", "repeated UserLeaderboardEntry"),
        ("total_count", "int32"),
        ("page", "int32"),
        ("page_size", "int32"),
    ],
    "HealthResponse": [("status", "string"), ("database", "string")],
    "ErrorResponse": [("error", "string")],
}


def build_file_descriptor() -> descriptor_pb2.FileDescriptorProto:
    """Assemble the proto3 file descriptor for ``SCHEMA``."""
    file_proto = descriptor_pb2.FileDescriptorProto(
        name=FILE_NAME,
        package=PACKAGE,
        syntax="proto3",
    )
    file_proto.dependency.extend(
        ["google/protobuf/timestamp.proto", "google/protobuf/wrappers.proto"]
    )

    for message_name, fields in SCHEMA.items():
        message = file_proto.message_type.add(name=message_name)
        for number, (field_name, field_type) in enumerate(fields, start=1):
            modifier, _, type_name = field_type.rpartition(" ")
            field = message.field.add(name=field_name, number=number)
            field.label = _Field.LABEL_REPEATED if modifier == "repeated" else _Field.LABEL_OPTIONAL
            if type_name in _SCALAR_TYPES:
                field.type = _SCALAR_TYPES[type_name]
            else:
                field.type = _Field.TYPE_MESSAGE
                field.type_name = _WELL_KNOWN_TYPES.get(type_name, f".{PACKAGE}.{type_name}")

    return file_proto


FILE_DESCRIPTOR = build_file_descriptor()

_pool = descriptor_pool.Default()
_pool.AddSerializedFile(FILE_DESCRIPTOR.SerializeToString())


def _message_class(name: str):
    return message_factory.GetMessageClass(_pool.FindMessageTypeByName(f"{PACKAGE}.{name}"))


Company = _message_class("Company")
CompanyList = _message_class("CompanyList")
MatchupPair = _message_class("MatchupPair")
VoteRequest = _message_class("VoteRequest")
VoteResponse = _message_class("VoteResponse")
LeaderboardResponse = _message_class("LeaderboardResponse")
RatingRequest = _message_class("RatingRequest")
CompanyRating = _message_class("CompanyRating")
AggregatedRating = _message_class("AggregatedRating")
AggregatedRatingList = _message_class("AggregatedRatingList")
CommentRequest = _message_class("CommentRequest")
CompanyComment = _message_class("CompanyComment")
CommentList = _message_class("CommentList")
CategoryCount = _message_class("CategoryCount")
CategoryCountList = _message_class("CategoryCountList")
StatsResponse = _message_class("StatsResponse")
UserLeaderboardEntry = _message_class("UserLeaderboardEntry")
UserLeaderboardResponse = _message_class("UserLeaderboardResponse")
HealthResponse = _message_class("HealthResponse")
ErrorResponse = _message_class("ErrorResponse")
