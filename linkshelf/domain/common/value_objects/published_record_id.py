from dataclasses import dataclass

from ..exceptions import ValidationError
from ..value_object import ValueObject


@dataclass(frozen=True)
class PublishedRecordId(ValueObject):
    """
    Provenance stamp of an external publication.

    A publication is identified by the record's AT-URI and the content id
    of the published revision. Several local rows may point at the same pair.
    """

    uri: str
    cid: str

    def __post_init__(self) -> None:
        if not self.uri or not self.uri.strip():
            raise ValidationError("Published record uri cannot be empty", field="uri")
        if not self.cid or not self.cid.strip():
            raise ValidationError("Published record cid cannot be empty", field="cid")

    def to_primitive(self) -> dict[str, str]:
        return {"uri": self.uri, "cid": self.cid}
