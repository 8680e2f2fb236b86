from dataclasses import dataclass, field
from typing import List

from handwrecognizer.dataset.Drawing import Drawing

@dataclass
class Dataset:
    names: List[str] = field(default_factory=list)
    drawings: List[Drawing] = field(default_factory=list)

    def add(self, name: str, drawing: Drawing) -> None:
        self.names.append(name)
        self.drawings.append(drawing)

    def __len__(self) -> int:
        return len(self.drawings)
