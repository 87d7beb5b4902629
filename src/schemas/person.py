"""Person registry schemas.

The person registry maps short author identifiers (as used in a source's
authorship declaration) to the contact details printed in a spec header:

    {
        "robin": {
            "name": "Robin Berjon",
            "email": "robin@berjon.com",
            "site": "https://berjon.com/"
        }
    }
"""

from pydantic import BaseModel, RootModel


class Person(BaseModel):
    """An editor or author of a specification.

    Attributes:
        name: Display name
        email: Contact address (rendered as a mailto: link)
        site: Personal site URL
    """

    name: str
    email: str
    site: str

    model_config = {"frozen": True}


class PersonRegistry(RootModel[dict[str, Person]]):
    """Lookup from author identifier to Person."""

    def get(self, author_id: str) -> Person | None:
        return self.root.get(author_id)

    def __contains__(self, author_id: str) -> bool:
        return author_id in self.root

    def __len__(self) -> int:
        return len(self.root)
