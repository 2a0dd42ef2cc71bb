from supabase import AsyncClient
from app.models.review_models import ReviewResponse, WorkerReviewsResponse
from app.custom_error import ServerError
import logging

logger = logging.getLogger(__name__)

RATINGS = (1, 2, 3, 4, 5)


class ReviewService:
    def __init__(self, supabase_client: AsyncClient):
        self.supabase_client = supabase_client

    async def get_worker_reviews(self, worker_id: str, limit: int = 10) -> WorkerReviewsResponse:
        """
        Latest reviews of a worker (reviews_with_user carries the employer name and avatar)
        plus the 1-5 star distribution and average computed over every visible review, not only the returned page.
        """
        try:
            reviews_result = (
                await self.supabase_client.table("reviews_with_user")
                .select("*")
                .eq("worker_id", worker_id)
                .eq("is_hidden", False)
                .order("created_at", desc=True)
                .limit(limit)
                .execute()
            )

            ratings_result = await self.supabase_client.table("reviews").select("rating, is_hidden").eq("worker_id", worker_id).execute()

            distribution = {str(rating): 0 for rating in RATINGS}
            ratings = []
            for row in ratings_result.data or []:
                rating = row.get("rating")
                if row.get("is_hidden") or rating not in RATINGS:
                    continue
                distribution[str(rating)] += 1
                ratings.append(rating)

            return WorkerReviewsResponse(
                reviews=[ReviewResponse(**row) for row in reviews_result.data or []],
                rating_distribution=distribution,
                average_rating=round(sum(ratings) / len(ratings), 2) if ratings else 0.0,
                total_reviews=len(ratings),
            )

        except Exception as e:
            logger.error(f"Error fetching reviews of worker {worker_id}: {str(e)}")
            raise ServerError(f"Failed to fetch reviews: {str(e)}")
