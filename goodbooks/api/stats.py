"""Statistics API endpoints."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends

from goodbooks.api.dependencies import get_repository, get_today, get_yearly_goal
from goodbooks.db import BookRepository
from goodbooks.models.schemas import AuthorCountRead, BookSummary, StatsRead, YearlyGoalUpdate
from goodbooks.services.statistics import ReadingStats, YearlyGoal, compute_reading_stats

router = APIRouter()


def _to_response(stats: ReadingStats) -> StatsRead:
    return StatsRead(
        total_books=stats.total_books,
        books_read=stats.books_read,
        books_reading=stats.books_reading,
        books_pending=stats.books_pending,
        total_pages_read=stats.total_pages_read,
        books_read_this_year=stats.books_read_this_year,
        average_rating=stats.average_rating,
        top_author=(
            AuthorCountRead(name=stats.top_author.name, count=stats.top_author.count)
            if stats.top_author
            else None
        ),
        longest_book=BookSummary.model_validate(stats.longest_book) if stats.longest_book else None,
        shortest_book=BookSummary.model_validate(stats.shortest_book) if stats.shortest_book else None,
        average_days_per_book=stats.average_days_per_book,
        yearly_goal=stats.yearly_goal,
        yearly_goal_progress=stats.yearly_goal_progress,
    )


@router.get("", response_model=StatsRead)
async def get_stats(
    repository: Annotated[BookRepository, Depends(get_repository)],
    yearly_goal: Annotated[YearlyGoal, Depends(get_yearly_goal)],
    today: Annotated[date, Depends(get_today)],
) -> StatsRead:
    """Reading statistics over the whole library."""
    books = await repository.get_all_books()
    stats = compute_reading_stats(books, today=today, yearly_goal=yearly_goal.value)
    return _to_response(stats)


@router.put("/goal", response_model=YearlyGoalUpdate)
async def update_goal(
    data: YearlyGoalUpdate,
    yearly_goal: Annotated[YearlyGoal, Depends(get_yearly_goal)],
) -> YearlyGoalUpdate:
    """Change the yearly reading goal for this session."""
    yearly_goal.value = data.goal
    return YearlyGoalUpdate(goal=yearly_goal.value)
