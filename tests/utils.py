def mark(text):
    return ["<s>", "<s>"] + text.split() + ["</s>"]
