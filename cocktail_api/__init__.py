"""Member backend for the luvCocktail recommendation app."""
