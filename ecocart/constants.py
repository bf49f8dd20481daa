SCORE_MIN = 70
SCORE_MAX = 90

ECO_POINTS_MIN = 50
ECO_POINTS_MAX = 199

# eco-points needed for the first reward, drives the progress bar
MILESTONE_POINTS = 500

SILVER_POINTS = 500
GOLD_POINTS = 1000

TIER_BRONZE = "Bronze"
TIER_SILVER = "Silver"
TIER_GOLD = "Gold"

TIERS = {
    TIER_GOLD: ("50% + Free Plant", "#FFD700"),
    TIER_SILVER: ("20%", "#C0C0C0"),
    TIER_BRONZE: ("No discount yet", "#CD7F32"),
}

MILESTONE_HEADER = "X-Eco-Milestone"
