"""Result records, field selection, formatting, conditions and output writers."""