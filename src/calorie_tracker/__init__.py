"""Personal calorie tracker with photo-based meal estimates."""
