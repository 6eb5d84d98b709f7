import uuid
from typing import Dict, List, Optional

from database import BaseRepository
from models.compliance_review import ComplianceReview


class ComplianceReviewRepository(BaseRepository):
    """Repository for ComplianceReview records in the Neo4j graph database.

    Reviews are stored as flat nodes: checklist tokens, photo URLs and the
    follow-up fields are plain node properties, dates are ISO strings.
    """

    @staticmethod
    def to_properties(review: ComplianceReview) -> Dict:
        """Flatten a review into Neo4j node properties."""
        params = review.model_dump(mode="json", exclude={"follow_up"})
        params.update(review.follow_up.model_dump(mode="json"))
        return params

    @staticmethod
    def to_model(node: Dict) -> ComplianceReview:
        """Convert a stored node back into a ComplianceReview."""
        return ComplianceReview.model_validate(node)

    def create(self, review: ComplianceReview) -> Optional[Dict]:
        """Create a new review node.

        Args:
            review: Review to store; an id is assigned when missing

        Returns:
            dict: Created review node data or None if creation fails
        """
        query = """
        CREATE (r:ComplianceReview)
        SET r = $props
        RETURN r
        """

        props = self.to_properties(review)
        if not props.get("id"):
            props["id"] = str(uuid.uuid4())

        result = self.execute_query(query, {"props": props})
        return result[0]['r'] if result else None

    def find_all(self, limit: Optional[int] = None) -> List[Dict]:
        """Get reviews, newest submission first.

        Args:
            limit: Maximum number of reviews to return, or None for every review

        Returns:
            list: Review nodes ordered by submitted_at descending
        """
        query = """
        MATCH (r:ComplianceReview)
        RETURN r
        ORDER BY r.submitted_at DESC
        """
        parameters = {}
        if limit is not None:
            query += "        LIMIT $limit\n"
            parameters["limit"] = limit

        result = self.execute_query(query, parameters)
        return [record['r'] for record in result]

    def find_by_id(self, review_id: str) -> Optional[Dict]:
        """Get a specific review by ID.

        Args:
            review_id: The review ID to search for

        Returns:
            dict: Review data or None if not found
        """
        query = """
        MATCH (r:ComplianceReview {id: $review_id})
        RETURN r
        """
        result = self.execute_query(query, {"review_id": review_id})
        return result[0]['r'] if result else None

    def find_reviews(self, limit: Optional[int] = None) -> List[ComplianceReview]:
        """Get reviews as models, newest submission first; every review when limit is None."""
        return [self.to_model(node) for node in self.find_all(limit=limit)]
