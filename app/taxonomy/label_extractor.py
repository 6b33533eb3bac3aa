from app.logging.logger import Log
from app.taxonomy.models import Taxonomy


class LabelExtractor:
    """Maps a free-text assistant reply to one of the taxonomy labels.

    Labels are tested in taxonomy order with plain, case-sensitive substring
    containment; the first label found anywhere in the reply wins, regardless
    of where it appears in the text. A label embedded in unrelated wording
    still matches.
    """

    def __init__(self, taxonomy: Taxonomy) -> None:
        self._labels = taxonomy.labels
        self._default_label = taxonomy.default_label

    def extract(self, reply_text: str) -> str:
        Log.debug(f"Assistant reply: {reply_text}")
        for label in self._labels:
            if label in reply_text:
                return label
        return self._default_label
