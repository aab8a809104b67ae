from pydantic import BaseModel


class ResultPage(BaseModel):
    query: str
    result_count: int
    links: list[str]


class LinkCheck(BaseModel):
    operator: str
    argument: str
    failures: list[str] = []

    @property
    def passed(self) -> bool:
        return not self.failures
