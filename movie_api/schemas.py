from pydantic import BaseModel
from typing import List, Optional

class Genre(BaseModel):
    id: int
    name: str

class MovieListItem(BaseModel):
    imdbId: str
    title: str
    genres: List[Genre] = []
    releaseDate: Optional[str] = None
    budget: str

class MovieDetail(BaseModel):
    imdbId: str
    title: str
    description: Optional[str] = None
    releaseDate: Optional[str] = None
    budget: str
    runtime: Optional[int] = None
    genres: List[Genre] = []
    originalLanguage: Optional[str] = None
    productionCompanies: List[Genre] = []
    averageRating: Optional[float] = None

class ErrorResponse(BaseModel):
    error: str
