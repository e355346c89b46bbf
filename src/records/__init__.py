"""Domain records for books, movies and todos."""

from records.base import RecordBase
from records.books import Author, Book, Publisher, Tag, book_key
from records.movies import Composer, Director, Movie, MovieKey, Role, movie_key
from records.todos import Complexity, Priority, Project, Task, Todo, todo_key

__all__ = [
    "Author",
    "Book",
    "Complexity",
    "Composer",
    "Director",
    "Movie",
    "MovieKey",
    "Priority",
    "Project",
    "Publisher",
    "RecordBase",
    "Role",
    "Tag",
    "Task",
    "Todo",
    "book_key",
    "movie_key",
    "todo_key",
]
