# worktime tests package
