"""Binary (protobuf) wire format: message classes and schema converters."""
