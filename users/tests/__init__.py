# users tests package
