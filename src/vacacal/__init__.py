"""vacacal - employee vacation calendar backed by a spreadsheet web app."""
