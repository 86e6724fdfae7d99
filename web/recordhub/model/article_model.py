"""
Article Model - Business logic for article data
"""
import logging
from typing import Any, Dict, List

from pymongo.errors import PyMongoError

from ..query import ARTICLE_QUERY, summarize_articles
from ..query.result_assembler import markup, profit_margin
from .database import ARTICLES_COLLECTION
from .record_model import RecordModel
from .validation import ValidationResult, validate_article

logger = logging.getLogger(__name__)

PRICE_BUCKETS = [0, 10, 50, 100, 500, 1000, 5000]


class ArticleModel(RecordModel):
    """Article data model with business logic"""

    collection_name = ARTICLES_COLLECTION
    label = "Article"
    query_config = ARTICLE_QUERY
    unique_fields = ('articleNumber',)

    def validate(self, payload: Dict[str, Any]) -> ValidationResult:
        result = validate_article(payload)
        if result.ok and result.data['salesPrice'] < result.data['purchasePrice']:
            logger.warning(f"Article {result.data['articleNumber']} has negative profit margin")
        return result

    def summarize(self, records: List[Dict[str, Any]]) -> Dict[str, Any]:
        return summarize_articles(records)

    def serialize(self, document: Dict[str, Any]) -> Dict[str, Any]:
        article = super().serialize(document)
        purchase_price = article.get('purchasePrice') or 0
        sales_price = article.get('salesPrice') or 0
        article['profitAmount'] = (
            round(sales_price - purchase_price, 2) if purchase_price and sales_price else 0
        )
        article['profitMargin'] = profit_margin(purchase_price, sales_price)
        article['markup'] = markup(purchase_price, sales_price)
        article['displayName'] = f"#{article.get('articleNumber')} - {article.get('articleName')}"
        return article

    def describe(self, document: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "id": str(document['_id']),
            "articleNumber": document.get('articleNumber'),
            "articleName": document.get('articleName'),
        }

    def get_statistics(self) -> Dict[str, Any]:
        """Statistics over every stored article"""
        try:
            collection = self.collection

            overview_pipeline = [
                {"$group": {
                    "_id": None,
                    "totalArticles": {"$sum": 1},
                    "totalInventoryValue": {"$sum": {"$multiply": ["$salesPrice", "$packageSize"]}},
                    "averageSalesPrice": {"$avg": "$salesPrice"},
                    "averagePurchasePrice": {"$avg": "$purchasePrice"},
                    "highestSalesPrice": {"$max": "$salesPrice"},
                    "lowestSalesPrice": {"$min": "$salesPrice"},
                    "totalPackageSize": {"$sum": "$packageSize"},
                }}
            ]
            overview = list(collection.aggregate(overview_pipeline))

            # Count by sales price bucket
            price_distribution = []
            for index, lower in enumerate(PRICE_BUCKETS):
                upper = PRICE_BUCKETS[index + 1] if index + 1 < len(PRICE_BUCKETS) else None
                price_query = {"$gte": lower}
                if upper is not None:
                    price_query["$lt"] = upper
                price_distribution.append({
                    "min": lower,
                    "max": upper,
                    "count": collection.count_documents({"salesPrice": price_query}),
                })

            # Count by unit
            unit_pipeline = [
                {"$group": {
                    "_id": "$unit",
                    "count": {"$sum": 1},
                    "totalValue": {"$sum": {"$multiply": ["$salesPrice", "$packageSize"]}},
                }},
                {"$sort": {"count": -1}},
                {"$limit": 10}
            ]
            top_units = list(collection.aggregate(unit_pipeline))
        except PyMongoError as e:
            raise self._storage_error("summarizing", e) from e

        if overview:
            summary = overview[0]
            summary.pop("_id", None)
            summary = {
                key: round(value, 2) if isinstance(value, float) else (value or 0)
                for key, value in summary.items()
            }
        else:
            summary = {
                "totalArticles": 0,
                "totalInventoryValue": 0,
                "averageSalesPrice": 0,
                "averagePurchasePrice": 0,
                "highestSalesPrice": 0,
                "lowestSalesPrice": 0,
                "totalPackageSize": 0,
            }

        return {
            "overview": summary,
            "priceDistribution": price_distribution,
            "topUnits": [
                {"unit": u["_id"], "count": u["count"], "totalValue": round(u["totalValue"] or 0, 2)}
                for u in top_units
            ],
        }
